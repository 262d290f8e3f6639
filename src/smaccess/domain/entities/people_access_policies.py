"""People access policy aggregates - the user and group grants of one resource."""

from dataclasses import dataclass, field
from uuid import UUID

from smaccess.domain.entities.access_policy import (
    GroupProjectAccessPolicy,
    GroupServiceAccountAccessPolicy,
    UserProjectAccessPolicy,
    UserServiceAccountAccessPolicy,
)


@dataclass
class ProjectPeopleAccessPolicies:
    """Users and groups with access to a project."""

    id: UUID
    organization_id: UUID
    user_access_policies: list[UserProjectAccessPolicy] = field(default_factory=list)
    group_access_policies: list[GroupProjectAccessPolicy] = field(default_factory=list)


@dataclass
class ServiceAccountPeopleAccessPolicies:
    """Users and groups with access to a service account."""

    id: UUID
    organization_id: UUID
    user_access_policies: list[UserServiceAccountAccessPolicy] = field(default_factory=list)
    group_access_policies: list[GroupServiceAccountAccessPolicy] = field(default_factory=list)
