"""Access policy repository port."""

from typing import Protocol
from uuid import UUID

from smaccess.domain.entities import (
    BaseAccessPolicy,
    ProjectPeopleAccessPolicies,
    ServiceAccountPeopleAccessPolicies,
)


class AccessPolicyRepository(Protocol):
    """Port for access policy persistence.

    create_many and replace_* raise BadRequest when the store rejects a
    duplicate (subject, resource) grant.
    """

    async def get_by_id(self, policy_id: UUID) -> BaseAccessPolicy | None: ...

    async def exists(self, policy: BaseAccessPolicy) -> bool: ...

    async def create_many(self, policies: list[BaseAccessPolicy]) -> list[BaseAccessPolicy]: ...

    async def update(self, policy: BaseAccessPolicy) -> None: ...

    async def delete(self, policy_id: UUID) -> None: ...

    async def list_by_granted_project(self, project_id: UUID) -> list[BaseAccessPolicy]: ...

    async def list_by_granted_service_account(
        self, service_account_id: UUID
    ) -> list[BaseAccessPolicy]: ...

    async def list_for_user_on_project(
        self, project_id: UUID, user_id: UUID
    ) -> list[BaseAccessPolicy]: ...

    async def list_for_user_on_service_account(
        self, service_account_id: UUID, user_id: UUID
    ) -> list[BaseAccessPolicy]: ...

    async def list_for_service_account_on_project(
        self, project_id: UUID, service_account_id: UUID
    ) -> list[BaseAccessPolicy]: ...

    async def replace_project_people(self, people: ProjectPeopleAccessPolicies) -> None: ...

    async def replace_service_account_people(
        self, people: ServiceAccountPeopleAccessPolicies
    ) -> None: ...
