"""Unit tests for access policy entities and helpers."""

from uuid import uuid4

import pytest

from smaccess.domain.entities import (
    BaseAccessPolicy,
    GroupProjectAccessPolicy,
    GroupServiceAccountAccessPolicy,
    ServiceAccountProjectAccessPolicy,
    UserProjectAccessPolicy,
    UserServiceAccountAccessPolicy,
)
from smaccess.domain.entities.access_policy import (
    access_policy_key,
    ensure_unique,
    granted_resource,
    validate_permissions,
)
from smaccess.domain.exceptions import BadRequest
from smaccess.domain.value_objects import GrantedResourceType


def test_new_policy_defaults() -> None:
    policy = UserProjectAccessPolicy(organization_user_id=uuid4(), granted_project_id=uuid4())
    assert policy.read is False
    assert policy.write is False
    assert policy.id is not None
    assert policy.creation_date.tzinfo is not None


def test_access_policy_key_per_variant() -> None:
    subject, resource = uuid4(), uuid4()
    assert access_policy_key(
        GroupProjectAccessPolicy(group_id=subject, granted_project_id=resource)
    ) == (subject, resource)
    assert access_policy_key(
        ServiceAccountProjectAccessPolicy(service_account_id=subject, granted_project_id=resource)
    ) == (subject, resource)
    assert access_policy_key(
        UserServiceAccountAccessPolicy(
            organization_user_id=subject, granted_service_account_id=resource
        )
    ) == (subject, resource)


def test_granted_resource() -> None:
    project_id, sa_id = uuid4(), uuid4()
    assert granted_resource(
        UserProjectAccessPolicy(organization_user_id=uuid4(), granted_project_id=project_id)
    ) == (GrantedResourceType.PROJECT, project_id)
    assert granted_resource(
        GroupServiceAccountAccessPolicy(group_id=uuid4(), granted_service_account_id=sa_id)
    ) == (GrantedResourceType.SERVICE_ACCOUNT, sa_id)


def test_unknown_variant_raises_type_error() -> None:
    with pytest.raises(TypeError, match="Unsupported access policy type"):
        access_policy_key(BaseAccessPolicy())
    with pytest.raises(TypeError):
        granted_resource(BaseAccessPolicy())


def test_ensure_unique_rejects_duplicate_subject() -> None:
    user, project = uuid4(), uuid4()
    policies = [
        UserProjectAccessPolicy(organization_user_id=user, granted_project_id=project, read=True),
        UserProjectAccessPolicy(
            organization_user_id=user, granted_project_id=project, read=True, write=True
        ),
    ]
    with pytest.raises(BadRequest, match="Resources must be unique"):
        ensure_unique(policies)


def test_ensure_unique_accepts_distinct_and_empty() -> None:
    project = uuid4()
    ensure_unique([])
    ensure_unique([
        UserProjectAccessPolicy(organization_user_id=uuid4(), granted_project_id=project),
        GroupProjectAccessPolicy(group_id=uuid4(), granted_project_id=project),
    ])


def test_validate_permissions() -> None:
    validate_permissions(True, True)
    validate_permissions(True, False)
    validate_permissions(False, False)
    with pytest.raises(BadRequest):
        validate_permissions(False, True)
