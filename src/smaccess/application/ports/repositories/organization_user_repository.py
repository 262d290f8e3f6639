"""Organization user repository port."""

from typing import Protocol
from uuid import UUID

from smaccess.domain.entities import OrganizationUser


class OrganizationUserRepository(Protocol):
    """Port for organization user lookups."""

    async def get_many(self, organization_user_ids: list[UUID]) -> list[OrganizationUser]: ...
