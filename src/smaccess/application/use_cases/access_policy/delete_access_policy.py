"""Delete access policy use case."""

import logging
from uuid import UUID

from smaccess.application.access import AccessQuery
from smaccess.application.context import CurrentContext
from smaccess.application.use_cases.access_policy.common import (
    ensure_write_access,
    granted_organization_id,
)
from smaccess.domain.entities.access_policy import granted_resource
from smaccess.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class DeleteAccessPolicyUseCase:
    """Revoke a single access policy."""

    def __init__(self, unit_of_work_factory: type, access_query: AccessQuery) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_query = access_query

    async def execute(self, context: CurrentContext, policy_id: UUID, user_id: UUID) -> None:
        async with self._uow_factory() as uow:
            policy = await uow.access_policies.get_by_id(policy_id)
            organization_id = await granted_organization_id(uow, policy) if policy else None
        if not policy or not organization_id:
            raise NotFound("AccessPolicy", str(policy_id))

        resource_type, resource_id = granted_resource(policy)
        await ensure_write_access(
            self._access_query, context, resource_type, resource_id, organization_id, user_id
        )

        async with self._uow_factory() as uow:
            await uow.access_policies.delete(policy.id)
        logger.info("Deleted access policy %s on %s %s", policy.id, resource_type, resource_id)
