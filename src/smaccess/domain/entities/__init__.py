"""Domain entities."""

from smaccess.domain.entities.access_policy import (
    BaseAccessPolicy,
    GroupProjectAccessPolicy,
    GroupServiceAccountAccessPolicy,
    ServiceAccountProjectAccessPolicy,
    UserProjectAccessPolicy,
    UserServiceAccountAccessPolicy,
)
from smaccess.domain.entities.group import Group
from smaccess.domain.entities.organization_user import OrganizationUser
from smaccess.domain.entities.people_access_policies import (
    ProjectPeopleAccessPolicies,
    ServiceAccountPeopleAccessPolicies,
)
from smaccess.domain.entities.project import Project
from smaccess.domain.entities.secret import Secret
from smaccess.domain.entities.service_account import ServiceAccount

__all__ = [
    "BaseAccessPolicy",
    "Group",
    "GroupProjectAccessPolicy",
    "GroupServiceAccountAccessPolicy",
    "OrganizationUser",
    "Project",
    "ProjectPeopleAccessPolicies",
    "Secret",
    "ServiceAccount",
    "ServiceAccountPeopleAccessPolicies",
    "ServiceAccountProjectAccessPolicy",
    "UserProjectAccessPolicy",
    "UserServiceAccountAccessPolicy",
]
