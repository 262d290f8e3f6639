"""Projects API resources."""

import falcon
import falcon.asgi

from smaccess.application.access import AccessQuery, to_access_client
from smaccess.application.dto.project_dto import ProjectUpdateInput
from smaccess.application.use_cases.project.update_project import UpdateProjectUseCase
from smaccess.domain.entities import Project
from smaccess.domain.exceptions import NotFound
from smaccess.interfaces.api.resources.common import (
    parse_uuid,
    require_context,
    set_error,
    set_not_found,
)


def _project_to_dict(project: Project) -> dict:
    return {
        "id": str(project.id),
        "organization_id": str(project.organization_id),
        "name": project.name,
        "creation_date": project.creation_date.isoformat(),
        "revision_date": project.revision_date.isoformat(),
    }


class ProjectResource:
    """GET/PUT /v1/projects/{project_id} - project with caller permissions, rename."""

    def __init__(
        self,
        unit_of_work_factory: type,
        access_query: AccessQuery,
        update_project: UpdateProjectUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_query = access_query
        self._update = update_project

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """Get project with the caller's read/write flags."""
        context = require_context(req, resp)
        if not context:
            return
        proj_id = parse_uuid(project_id)
        if not proj_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid project ID"}
            return

        async with self._uow_factory() as uow:
            project = await uow.projects.get_by_id(proj_id)
        if not project or not context.access_secrets_manager(project.organization_id):
            set_not_found(resp)
            return

        access_client = to_access_client(
            context.client_type, context.organization_admin(project.organization_id)
        )
        read, write = await self._access_query.access_to_project(
            project.id, context.user_id, access_client
        )
        if not read:
            set_not_found(resp)
            return

        resp.media = {**_project_to_dict(project), "read": read, "write": write}
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """Rename project."""
        context = require_context(req, resp)
        if not context:
            return
        proj_id = parse_uuid(project_id)
        if not proj_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid project ID"}
            return

        body = await req.get_media(default_when_empty={})
        name = body.get("name")
        if not name:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Missing required field: 'name'"}
            return

        try:
            project = await self._update.execute(
                context, ProjectUpdateInput(id=proj_id, name=name), context.user_id
            )
            resp.media = _project_to_dict(project)
            resp.status = falcon.HTTP_200
        except NotFound as e:
            set_error(resp, e)
