"""Repository ports."""

from smaccess.application.ports.repositories.access_policy_repository import (
    AccessPolicyRepository,
)
from smaccess.application.ports.repositories.group_repository import GroupRepository
from smaccess.application.ports.repositories.organization_user_repository import (
    OrganizationUserRepository,
)
from smaccess.application.ports.repositories.project_repository import ProjectRepository
from smaccess.application.ports.repositories.secret_repository import SecretRepository
from smaccess.application.ports.repositories.service_account_repository import (
    ServiceAccountRepository,
)

__all__ = [
    "AccessPolicyRepository",
    "GroupRepository",
    "OrganizationUserRepository",
    "ProjectRepository",
    "SecretRepository",
    "ServiceAccountRepository",
]
