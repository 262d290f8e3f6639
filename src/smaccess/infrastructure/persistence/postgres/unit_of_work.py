"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from smaccess.infrastructure.persistence.postgres.access_policy_repository import (
    PostgresAccessPolicyRepository,
)
from smaccess.infrastructure.persistence.postgres.group_repository import (
    PostgresGroupRepository,
)
from smaccess.infrastructure.persistence.postgres.organization_user_repository import (
    PostgresOrganizationUserRepository,
)
from smaccess.infrastructure.persistence.postgres.project_repository import (
    PostgresProjectRepository,
)
from smaccess.infrastructure.persistence.postgres.secret_repository import (
    PostgresSecretRepository,
)
from smaccess.infrastructure.persistence.postgres.service_account_repository import (
    PostgresServiceAccountRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._access_policies = PostgresAccessPolicyRepository(self._conn)
        self._projects = PostgresProjectRepository(self._conn)
        self._service_accounts = PostgresServiceAccountRepository(self._conn)
        self._secrets = PostgresSecretRepository(self._conn)
        self._organization_users = PostgresOrganizationUserRepository(self._conn)
        self._groups = PostgresGroupRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def access_policies(self) -> PostgresAccessPolicyRepository:
        return self._access_policies

    @property
    def projects(self) -> PostgresProjectRepository:
        return self._projects

    @property
    def service_accounts(self) -> PostgresServiceAccountRepository:
        return self._service_accounts

    @property
    def secrets(self) -> PostgresSecretRepository:
        return self._secrets

    @property
    def organization_users(self) -> PostgresOrganizationUserRepository:
        return self._organization_users

    @property
    def groups(self) -> PostgresGroupRepository:
        return self._groups

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
