"""Access policy entities - read/write grants from a subject to a resource.

Subjects are organization users, groups or service accounts. Resources are
projects or service accounts. Each subject/resource combination is its own
dataclass; helpers below dispatch on the concrete type and raise TypeError
for anything they do not know.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from smaccess.domain.exceptions import BadRequest
from smaccess.domain.value_objects import GrantedResourceType


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(kw_only=True)
class BaseAccessPolicy:
    """Common fields of every access policy."""

    id: UUID = field(default_factory=uuid4)
    read: bool = False
    write: bool = False
    creation_date: datetime = field(default_factory=_utcnow)
    revision_date: datetime = field(default_factory=_utcnow)


@dataclass(kw_only=True)
class UserProjectAccessPolicy(BaseAccessPolicy):
    organization_user_id: UUID
    granted_project_id: UUID


@dataclass(kw_only=True)
class GroupProjectAccessPolicy(BaseAccessPolicy):
    group_id: UUID
    granted_project_id: UUID


@dataclass(kw_only=True)
class ServiceAccountProjectAccessPolicy(BaseAccessPolicy):
    service_account_id: UUID
    granted_project_id: UUID


@dataclass(kw_only=True)
class UserServiceAccountAccessPolicy(BaseAccessPolicy):
    organization_user_id: UUID
    granted_service_account_id: UUID


@dataclass(kw_only=True)
class GroupServiceAccountAccessPolicy(BaseAccessPolicy):
    group_id: UUID
    granted_service_account_id: UUID


PROJECT_POLICY_TYPES = (
    UserProjectAccessPolicy,
    GroupProjectAccessPolicy,
    ServiceAccountProjectAccessPolicy,
)
SERVICE_ACCOUNT_POLICY_TYPES = (
    UserServiceAccountAccessPolicy,
    GroupServiceAccountAccessPolicy,
)


def access_policy_key(policy: BaseAccessPolicy) -> tuple[UUID, UUID]:
    """Return the (subject id, resource id) pair that must be unique per batch."""
    if isinstance(policy, UserProjectAccessPolicy):
        return (policy.organization_user_id, policy.granted_project_id)
    if isinstance(policy, GroupProjectAccessPolicy):
        return (policy.group_id, policy.granted_project_id)
    if isinstance(policy, ServiceAccountProjectAccessPolicy):
        return (policy.service_account_id, policy.granted_project_id)
    if isinstance(policy, UserServiceAccountAccessPolicy):
        return (policy.organization_user_id, policy.granted_service_account_id)
    if isinstance(policy, GroupServiceAccountAccessPolicy):
        return (policy.group_id, policy.granted_service_account_id)
    raise TypeError(f"Unsupported access policy type provided: {type(policy).__name__}")


def granted_resource(policy: BaseAccessPolicy) -> tuple[GrantedResourceType, UUID]:
    """Return the kind and id of the resource the policy grants access to."""
    if isinstance(policy, PROJECT_POLICY_TYPES):
        return (GrantedResourceType.PROJECT, policy.granted_project_id)
    if isinstance(policy, SERVICE_ACCOUNT_POLICY_TYPES):
        return (GrantedResourceType.SERVICE_ACCOUNT, policy.granted_service_account_id)
    raise TypeError(f"Unsupported access policy type provided: {type(policy).__name__}")


def ensure_unique(policies: list[BaseAccessPolicy]) -> None:
    """Raise BadRequest if two policies share the same subject and resource."""
    distinct = {access_policy_key(p) for p in policies}
    if len(distinct) != len(policies):
        raise BadRequest("Resources must be unique")


def validate_permissions(read: bool, write: bool) -> None:
    """Write access is only granted together with read access."""
    if write and not read:
        raise BadRequest("Write access requires read access")
