"""Pytest fixtures for smaccess tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from smaccess.application.access import AccessQuery
from smaccess.application.context import CurrentContext, CurrentOrganization
from smaccess.domain.entities import (
    BaseAccessPolicy,
    Group,
    GroupProjectAccessPolicy,
    GroupServiceAccountAccessPolicy,
    OrganizationUser,
    Project,
    ProjectPeopleAccessPolicies,
    Secret,
    ServiceAccount,
    ServiceAccountPeopleAccessPolicies,
    ServiceAccountProjectAccessPolicy,
    UserProjectAccessPolicy,
    UserServiceAccountAccessPolicy,
)
from smaccess.domain.entities.access_policy import access_policy_key
from smaccess.domain.exceptions import BadRequest
from smaccess.domain.value_objects import ClientType, OrganizationUserType


# --- Fake repositories ---


class FakeProjectRepository:
    """In-memory project repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Project] = {}

    async def get_by_id(self, project_id: UUID) -> Project | None:
        project = self._by_id.get(project_id)
        if not project or project.deleted_date:
            return None
        return project

    async def update(self, project: Project) -> None:
        self._by_id[project.id] = project

    async def projects_are_in_organization(
        self, project_ids: list[UUID], organization_id: UUID
    ) -> bool:
        return all(
            p in self._by_id
            and self._by_id[p].organization_id == organization_id
            and self._by_id[p].deleted_date is None
            for p in project_ids
        )

    def add(self, project: Project) -> Project:
        self._by_id[project.id] = project
        return project


class FakeServiceAccountRepository:
    """In-memory service account repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, ServiceAccount] = {}

    async def get_by_id(self, service_account_id: UUID) -> ServiceAccount | None:
        return self._by_id.get(service_account_id)

    def add(self, service_account: ServiceAccount) -> ServiceAccount:
        self._by_id[service_account.id] = service_account
        return service_account


class FakeSecretRepository:
    """In-memory secret repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Secret] = {}

    async def get_by_id(self, secret_id: UUID) -> Secret | None:
        secret = self._by_id.get(secret_id)
        if not secret or secret.deleted_date:
            return None
        return secret

    async def update(self, secret: Secret) -> None:
        self._by_id[secret.id] = secret

    def add(self, secret: Secret) -> Secret:
        self._by_id[secret.id] = secret
        return secret


class FakeOrganizationUserRepository:
    """In-memory organization user repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, OrganizationUser] = {}

    async def get_many(self, organization_user_ids: list[UUID]) -> list[OrganizationUser]:
        # Distinct rows, like WHERE id = ANY(...)
        return [self._by_id[i] for i in set(organization_user_ids) if i in self._by_id]

    def ids_for_user(self, user_id: UUID, organization_id: UUID) -> set[UUID]:
        return {
            ou.id
            for ou in self._by_id.values()
            if ou.user_id == user_id and ou.organization_id == organization_id
        }

    def add(self, org_user: OrganizationUser) -> OrganizationUser:
        self._by_id[org_user.id] = org_user
        return org_user


class FakeGroupRepository:
    """In-memory group repository with group_user membership."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Group] = {}
        self._members: dict[UUID, set[UUID]] = {}  # group_id -> {organization_user_id}

    async def get_many_by_ids(self, group_ids: list[UUID]) -> list[Group]:
        return [self._by_id[i] for i in set(group_ids) if i in self._by_id]

    def group_ids_for(self, organization_user_ids: set[UUID]) -> set[UUID]:
        return {g for g, members in self._members.items() if members & organization_user_ids}

    def add(self, group: Group, *member_ids: UUID) -> Group:
        self._by_id[group.id] = group
        self._members.setdefault(group.id, set()).update(member_ids)
        return group


class FakeAccessPolicyRepository:
    """In-memory access policy repository.

    Resolves user -> organization users -> groups through the sibling fakes,
    limited to the organization that owns the granted resource.
    """

    def __init__(
        self,
        projects: FakeProjectRepository,
        service_accounts: FakeServiceAccountRepository,
        organization_users: FakeOrganizationUserRepository,
        groups: FakeGroupRepository,
    ) -> None:
        self._by_id: dict[UUID, BaseAccessPolicy] = {}
        self._projects = projects
        self._service_accounts = service_accounts
        self._organization_users = organization_users
        self._groups = groups

    def _key(self, policy: BaseAccessPolicy) -> tuple:
        return (type(policy), *access_policy_key(policy))

    async def get_by_id(self, policy_id: UUID) -> BaseAccessPolicy | None:
        return self._by_id.get(policy_id)

    async def exists(self, policy: BaseAccessPolicy) -> bool:
        key = self._key(policy)
        return any(self._key(p) == key for p in self._by_id.values())

    async def create_many(self, policies: list[BaseAccessPolicy]) -> list[BaseAccessPolicy]:
        for policy in policies:
            if await self.exists(policy):
                raise BadRequest("Resource already exists")
            self._by_id[policy.id] = policy
        return policies

    async def update(self, policy: BaseAccessPolicy) -> None:
        self._by_id[policy.id] = policy

    async def delete(self, policy_id: UUID) -> None:
        self._by_id.pop(policy_id, None)

    async def list_by_granted_project(self, project_id: UUID) -> list[BaseAccessPolicy]:
        return [
            p for p in self._by_id.values()
            if getattr(p, "granted_project_id", None) == project_id
        ]

    async def list_by_granted_service_account(
        self, service_account_id: UUID
    ) -> list[BaseAccessPolicy]:
        return [
            p for p in self._by_id.values()
            if getattr(p, "granted_service_account_id", None) == service_account_id
        ]

    async def list_for_user_on_project(
        self, project_id: UUID, user_id: UUID
    ) -> list[BaseAccessPolicy]:
        org_user_ids, group_ids = self._memberships(user_id, self._projects._by_id.get(project_id))
        return [
            p for p in await self.list_by_granted_project(project_id)
            if (isinstance(p, UserProjectAccessPolicy) and p.organization_user_id in org_user_ids)
            or (isinstance(p, GroupProjectAccessPolicy) and p.group_id in group_ids)
        ]

    async def list_for_user_on_service_account(
        self, service_account_id: UUID, user_id: UUID
    ) -> list[BaseAccessPolicy]:
        service_account = self._service_accounts._by_id.get(service_account_id)
        org_user_ids, group_ids = self._memberships(user_id, service_account)
        return [
            p for p in await self.list_by_granted_service_account(service_account_id)
            if (
                isinstance(p, UserServiceAccountAccessPolicy)
                and p.organization_user_id in org_user_ids
            )
            or (isinstance(p, GroupServiceAccountAccessPolicy) and p.group_id in group_ids)
        ]

    async def list_for_service_account_on_project(
        self, project_id: UUID, service_account_id: UUID
    ) -> list[BaseAccessPolicy]:
        return [
            p for p in await self.list_by_granted_project(project_id)
            if isinstance(p, ServiceAccountProjectAccessPolicy)
            and p.service_account_id == service_account_id
        ]

    async def replace_project_people(self, people: ProjectPeopleAccessPolicies) -> None:
        for p in await self.list_by_granted_project(people.id):
            if isinstance(p, UserProjectAccessPolicy | GroupProjectAccessPolicy):
                del self._by_id[p.id]
        await self.create_many([*people.user_access_policies, *people.group_access_policies])

    async def replace_service_account_people(
        self, people: ServiceAccountPeopleAccessPolicies
    ) -> None:
        for p in await self.list_by_granted_service_account(people.id):
            del self._by_id[p.id]
        await self.create_many([*people.user_access_policies, *people.group_access_policies])

    def _memberships(self, user_id: UUID, resource) -> tuple[set[UUID], set[UUID]]:
        if resource is None:
            return set(), set()
        org_user_ids = self._organization_users.ids_for_user(user_id, resource.organization_id)
        return org_user_ids, self._groups.group_ids_for(org_user_ids)

    def add(self, *policies: BaseAccessPolicy) -> None:
        for policy in policies:
            self._by_id[policy.id] = policy


class FakeUnitOfWork:
    """Fake UoW with in-memory repositories."""

    def __init__(self) -> None:
        self.projects = FakeProjectRepository()
        self.service_accounts = FakeServiceAccountRepository()
        self.secrets = FakeSecretRepository()
        self.organization_users = FakeOrganizationUserRepository()
        self.groups = FakeGroupRepository()
        self.access_policies = FakeAccessPolicyRepository(
            self.projects, self.service_accounts, self.organization_users, self.groups
        )

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory that yields the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Builders ---


def make_context(
    organization_id: UUID,
    user_id: UUID | None = None,
    org_type: OrganizationUserType = OrganizationUserType.USER,
    client_type: ClientType = ClientType.USER,
    access_secrets_manager: bool = True,
) -> CurrentContext:
    """Caller context with a single organization membership."""
    return CurrentContext(
        user_id=user_id or uuid4(),
        client_type=client_type,
        organizations=[
            CurrentOrganization(
                id=organization_id,
                type=org_type,
                access_secrets_manager=access_secrets_manager,
            )
        ],
    )


def make_project(organization_id: UUID, name: str = "project") -> Project:
    now = datetime.now(UTC)
    return Project(
        id=uuid4(),
        organization_id=organization_id,
        name=name,
        creation_date=now,
        revision_date=now,
    )


def make_service_account(organization_id: UUID, name: str = "ci") -> ServiceAccount:
    now = datetime.now(UTC)
    return ServiceAccount(
        id=uuid4(),
        organization_id=organization_id,
        name=name,
        creation_date=now,
        revision_date=now,
    )


def make_secret(organization_id: UUID, *project_ids: UUID) -> Secret:
    now = datetime.now(UTC)
    return Secret(
        id=uuid4(),
        organization_id=organization_id,
        key="2.enc-key",
        value="2.enc-value",
        note="2.enc-note",
        creation_date=now,
        revision_date=now,
        project_ids=list(project_ids),
    )


def make_member(uow: FakeUnitOfWork, organization_id: UUID, user_id: UUID) -> OrganizationUser:
    """Register user_id as a plain member of the organization."""
    return uow.organization_users.add(
        OrganizationUser(id=uuid4(), organization_id=organization_id, user_id=user_id)
    )


# --- Fixtures ---


@pytest.fixture
def organization_id() -> UUID:
    return uuid4()


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(uow: FakeUnitOfWork):
    return make_uow_factory(uow)


@pytest.fixture
def access_query(uow_factory) -> AccessQuery:
    return AccessQuery(uow_factory)
