"""Group repository port."""

from typing import Protocol
from uuid import UUID

from smaccess.domain.entities import Group


class GroupRepository(Protocol):
    """Port for group lookups."""

    async def get_many_by_ids(self, group_ids: list[UUID]) -> list[Group]: ...
