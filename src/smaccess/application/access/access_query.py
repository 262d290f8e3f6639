"""Access check queries - effective read/write of a principal on a resource."""

import logging
from uuid import UUID

from smaccess.domain.entities import BaseAccessPolicy
from smaccess.domain.value_objects import AccessClientType, GrantedResourceType

logger = logging.getLogger(__name__)


def combine_access(policies: list[BaseAccessPolicy]) -> tuple[bool, bool]:
    """OR together overlapping grants. Any write grant also allows read."""
    read = any(p.read or p.write for p in policies)
    write = any(p.write for p in policies)
    return read, write


class AccessQuery:
    """Answers "what can principal X do on resource Y" from stored policies."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def access_to_project(
        self, project_id: UUID, user_id: UUID, access_client: AccessClientType
    ) -> tuple[bool, bool]:
        """Return (read, write) for user_id on the project.

        For SERVICE_ACCOUNT callers user_id is the service account id.
        """
        if access_client == AccessClientType.NO_ACCESS_CHECK:
            return True, True
        if access_client not in (AccessClientType.USER, AccessClientType.SERVICE_ACCOUNT):
            return False, False

        async with self._uow_factory() as uow:
            if access_client == AccessClientType.USER:
                policies = await uow.access_policies.list_for_user_on_project(
                    project_id, user_id
                )
            else:
                policies = await uow.access_policies.list_for_service_account_on_project(
                    project_id, user_id
                )
        return combine_access(policies)

    async def access_to_service_account(
        self, service_account_id: UUID, user_id: UUID, access_client: AccessClientType
    ) -> tuple[bool, bool]:
        """Return (read, write) for user_id on the service account."""
        if access_client == AccessClientType.NO_ACCESS_CHECK:
            return True, True
        if access_client != AccessClientType.USER:
            return False, False

        async with self._uow_factory() as uow:
            policies = await uow.access_policies.list_for_user_on_service_account(
                service_account_id, user_id
            )
        return combine_access(policies)

    async def access_to_resource(
        self,
        resource_type: GrantedResourceType,
        resource_id: UUID,
        user_id: UUID,
        access_client: AccessClientType,
    ) -> tuple[bool, bool]:
        if resource_type == GrantedResourceType.PROJECT:
            return await self.access_to_project(resource_id, user_id, access_client)
        if resource_type == GrantedResourceType.SERVICE_ACCOUNT:
            return await self.access_to_service_account(resource_id, user_id, access_client)
        raise ValueError(f"Unsupported resource type: {resource_type!r}")

    async def can_write(
        self,
        resource_type: GrantedResourceType,
        resource_id: UUID,
        user_id: UUID,
        access_client: AccessClientType,
    ) -> bool:
        """Write check used by commands: admins pass, users need a write grant."""
        if access_client == AccessClientType.NO_ACCESS_CHECK:
            return True
        if access_client != AccessClientType.USER:
            return False
        _, write = await self.access_to_resource(
            resource_type, resource_id, user_id, access_client
        )
        if not write:
            logger.debug(
                "User %s has no write access to %s %s", user_id, resource_type, resource_id
            )
        return write
