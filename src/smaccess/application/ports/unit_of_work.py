"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

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


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def access_policies(self) -> AccessPolicyRepository: ...

    @property
    def projects(self) -> ProjectRepository: ...

    @property
    def service_accounts(self) -> ServiceAccountRepository: ...

    @property
    def secrets(self) -> SecretRepository: ...

    @property
    def organization_users(self) -> OrganizationUserRepository: ...

    @property
    def groups(self) -> GroupRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
