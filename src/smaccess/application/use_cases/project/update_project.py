"""Update project use case."""

from datetime import UTC, datetime
from uuid import UUID

from smaccess.application.access import AccessQuery, to_access_client
from smaccess.application.context import CurrentContext
from smaccess.application.dto.project_dto import ProjectUpdateInput
from smaccess.domain.entities import Project
from smaccess.domain.exceptions import NotFound
from smaccess.domain.value_objects import GrantedResourceType


class UpdateProjectUseCase:
    """Rename a project the caller can write to."""

    def __init__(self, unit_of_work_factory: type, access_query: AccessQuery) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_query = access_query

    async def execute(
        self, context: CurrentContext, updated_project: ProjectUpdateInput, user_id: UUID
    ) -> Project:
        """Apply the new name and return the stored project."""
        async with self._uow_factory() as uow:
            project = await uow.projects.get_by_id(updated_project.id)
        if not project or not context.access_secrets_manager(project.organization_id):
            raise NotFound("Project", str(updated_project.id))

        access_client = to_access_client(
            context.client_type, context.organization_admin(project.organization_id)
        )
        if not await self._access_query.can_write(
            GrantedResourceType.PROJECT, project.id, user_id, access_client
        ):
            raise NotFound("Project", str(updated_project.id))

        project.name = updated_project.name
        project.revision_date = datetime.now(UTC)
        async with self._uow_factory() as uow:
            await uow.projects.update(project)
        return project
