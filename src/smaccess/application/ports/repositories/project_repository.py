"""Project repository port."""

from typing import Protocol
from uuid import UUID

from smaccess.domain.entities import Project


class ProjectRepository(Protocol):
    """Port for project persistence."""

    async def get_by_id(self, project_id: UUID) -> Project | None: ...

    async def update(self, project: Project) -> None: ...

    async def projects_are_in_organization(
        self, project_ids: list[UUID], organization_id: UUID
    ) -> bool: ...
