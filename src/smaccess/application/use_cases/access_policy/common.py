"""Shared gating for access policy commands."""

import logging
from uuid import UUID

from smaccess.application.access import AccessQuery, to_access_client
from smaccess.application.context import CurrentContext
from smaccess.domain.entities import BaseAccessPolicy
from smaccess.domain.entities.access_policy import granted_resource
from smaccess.domain.exceptions import NotFound
from smaccess.domain.value_objects import GrantedResourceType

logger = logging.getLogger(__name__)


async def granted_organization_id(uow, policy: BaseAccessPolicy) -> UUID | None:
    """Organization of the resource a policy grants, or None if the resource is gone."""
    resource_type, resource_id = granted_resource(policy)
    if resource_type == GrantedResourceType.PROJECT:
        resource = await uow.projects.get_by_id(resource_id)
    else:
        resource = await uow.service_accounts.get_by_id(resource_id)
    return resource.organization_id if resource else None


async def ensure_write_access(
    access_query: AccessQuery,
    context: CurrentContext,
    resource_type: GrantedResourceType,
    resource_id: UUID,
    organization_id: UUID,
    user_id: UUID,
) -> None:
    """Raise NotFound unless the caller may change grants on the resource."""
    if not context.access_secrets_manager(organization_id):
        raise NotFound(resource_type.value, str(resource_id))

    access_client = to_access_client(
        context.client_type, context.organization_admin(organization_id)
    )
    if not await access_query.can_write(resource_type, resource_id, user_id, access_client):
        logger.info(
            "Denied access policy change on %s %s for %s (%s)",
            resource_type,
            resource_id,
            user_id,
            access_client,
        )
        raise NotFound(resource_type.value, str(resource_id))
