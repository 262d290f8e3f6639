"""Update secret use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from smaccess.application.access import AccessQuery, to_access_client
from smaccess.application.context import CurrentContext
from smaccess.application.dto.secret_dto import SecretUpdateInput
from smaccess.domain.entities import Secret
from smaccess.domain.exceptions import BadRequest, NotFound
from smaccess.domain.value_objects import AccessClientType

logger = logging.getLogger(__name__)


class UpdateSecretUseCase:
    """Update a secret's encrypted fields and, optionally, move it between projects.

    A USER caller must hold write access on both the current project and the
    target project.
    """

    def __init__(self, unit_of_work_factory: type, access_query: AccessQuery) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_query = access_query

    async def execute(
        self, context: CurrentContext, updated_secret: SecretUpdateInput, user_id: UUID
    ) -> Secret:
        """Apply changes and return the stored secret. Raises NotFound on any denial."""
        if len(updated_secret.project_ids) > 1:
            raise BadRequest("Only one project assignment is supported.")

        async with self._uow_factory() as uow:
            secret = await uow.secrets.get_by_id(updated_secret.id)
            if not secret or not context.access_secrets_manager(secret.organization_id):
                raise NotFound("Secret", str(updated_secret.id))

            if updated_secret.project_ids and not await uow.projects.projects_are_in_organization(
                updated_secret.project_ids, secret.organization_id
            ):
                raise NotFound("Secret", str(updated_secret.id))

        access_client = to_access_client(
            context.client_type, context.organization_admin(secret.organization_id)
        )
        if not await self._has_access_to_original_and_updated_project(
            access_client, secret, updated_secret, user_id
        ):
            logger.info("Denied update of secret %s for %s", secret.id, user_id)
            raise NotFound("Secret", str(updated_secret.id))

        secret.key = updated_secret.key
        secret.value = updated_secret.value
        secret.note = updated_secret.note
        secret.project_ids = list(updated_secret.project_ids)
        secret.revision_date = datetime.now(UTC)
        async with self._uow_factory() as uow:
            await uow.secrets.update(secret)
        return secret

    async def _has_access_to_original_and_updated_project(
        self,
        access_client: AccessClientType,
        secret: Secret,
        updated_secret: SecretUpdateInput,
        user_id: UUID,
    ) -> bool:
        if access_client == AccessClientType.NO_ACCESS_CHECK:
            return True
        if access_client != AccessClientType.USER:
            return False

        old_project = secret.project_ids[0] if secret.project_ids else None
        new_project = updated_secret.project_ids[0] if updated_secret.project_ids else None
        if old_project is None or new_project is None:
            return False

        _, write_old = await self._access_query.access_to_project(
            old_project, user_id, access_client
        )
        if not write_old:
            return False
        _, write_new = await self._access_query.access_to_project(
            new_project, user_id, access_client
        )
        return write_new
