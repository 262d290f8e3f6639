"""Authorization handler for people (user and group) access policies.

Decides whether the current caller may read or replace the set of users and
groups that have access to a project or a service account.
"""

import logging
from uuid import UUID

from smaccess.application.access import AccessQuery, get_access_client
from smaccess.application.authorization.authorization_result import AuthorizationResult
from smaccess.application.context import CurrentContext
from smaccess.domain.entities import (
    ProjectPeopleAccessPolicies,
    ServiceAccountPeopleAccessPolicies,
)
from smaccess.domain.entities.access_policy import granted_resource
from smaccess.domain.value_objects import (
    AccessClientType,
    AccessPolicyOperation,
    GrantedResourceType,
)

logger = logging.getLogger(__name__)

_NIL_UUID = UUID(int=0)

PeopleAccessPolicies = ProjectPeopleAccessPolicies | ServiceAccountPeopleAccessPolicies


def _resource_type(resource: PeopleAccessPolicies) -> GrantedResourceType:
    if isinstance(resource, ProjectPeopleAccessPolicies):
        return GrantedResourceType.PROJECT
    if isinstance(resource, ServiceAccountPeopleAccessPolicies):
        return GrantedResourceType.SERVICE_ACCOUNT
    raise TypeError(f"Unsupported people access policies type: {type(resource).__name__}")


class PeopleAccessPoliciesAuthorizationHandler:
    """Checks READ and REPLACE on project / service account people policies."""

    def __init__(self, unit_of_work_factory: type, access_query: AccessQuery) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_query = access_query

    async def handle(
        self,
        context: CurrentContext,
        resource: PeopleAccessPolicies,
        operation: AccessPolicyOperation,
    ) -> AuthorizationResult:
        """Run the checks and return the outcome. Denials never raise."""
        result = AuthorizationResult()
        resource_type = _resource_type(resource)

        if resource.organization_id is None or resource.organization_id == _NIL_UUID:
            return result

        if not context.access_secrets_manager(resource.organization_id):
            result.fail()
            return result

        access_client, user_id = get_access_client(context, resource.organization_id)
        if access_client in (AccessClientType.SERVICE_ACCOUNT, AccessClientType.ORGANIZATION):
            logger.debug("Client %s may not manage people access policies", access_client)
            result.fail()
            return result

        if operation == AccessPolicyOperation.READ:
            allowed = await self._can_read(resource_type, resource, access_client, user_id)
        elif operation == AccessPolicyOperation.REPLACE:
            allowed = await self._can_replace(resource_type, resource, access_client, user_id)
        else:
            raise ValueError(f"Unsupported operation requirement type provided: {operation!r}")

        if allowed:
            result.succeed()
        else:
            result.fail()
        return result

    async def _can_read(
        self,
        resource_type: GrantedResourceType,
        resource: PeopleAccessPolicies,
        access_client: AccessClientType,
        user_id: UUID,
    ) -> bool:
        if access_client == AccessClientType.NO_ACCESS_CHECK:
            return True
        read, _ = await self._access_query.access_to_resource(
            resource_type, resource.id, user_id, access_client
        )
        return read

    async def _can_replace(
        self,
        resource_type: GrantedResourceType,
        resource: PeopleAccessPolicies,
        access_client: AccessClientType,
        user_id: UUID,
    ) -> bool:
        policies = [*resource.user_access_policies, *resource.group_access_policies]
        if any(granted_resource(p) != (resource_type, resource.id) for p in policies):
            logger.info("Replace for %s %s references another resource", resource_type, resource.id)
            return False

        if not await self._people_in_organization(resource):
            return False

        if access_client == AccessClientType.USER:
            _, write = await self._access_query.access_to_resource(
                resource_type, resource.id, user_id, access_client
            )
            return write
        return True

    async def _people_in_organization(self, resource: PeopleAccessPolicies) -> bool:
        """Every referenced member and group must exist in the resource's organization.

        Counts are compared against the requested ids as given, so a missing
        id and a repeated id both fail.
        """
        org_user_ids = [p.organization_user_id for p in resource.user_access_policies]
        group_ids = [p.group_id for p in resource.group_access_policies]

        async with self._uow_factory() as uow:
            if org_user_ids:
                org_users = await uow.organization_users.get_many(org_user_ids)
                if len(org_users) != len(org_user_ids) or any(
                    u.organization_id != resource.organization_id for u in org_users
                ):
                    logger.info(
                        "Organization users for %s are missing or outside organization %s",
                        resource.id,
                        resource.organization_id,
                    )
                    return False

            if group_ids:
                groups = await uow.groups.get_many_by_ids(group_ids)
                if len(groups) != len(group_ids) or any(
                    g.organization_id != resource.organization_id for g in groups
                ):
                    logger.info(
                        "Groups for %s are missing or outside organization %s",
                        resource.id,
                        resource.organization_id,
                    )
                    return False
        return True
