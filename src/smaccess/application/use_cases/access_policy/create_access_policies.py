"""Create access policies use case."""

import logging
from uuid import UUID

from smaccess.application.access import AccessQuery
from smaccess.application.context import CurrentContext
from smaccess.application.use_cases.access_policy.common import ensure_write_access
from smaccess.domain.entities import (
    BaseAccessPolicy,
    GroupProjectAccessPolicy,
    GroupServiceAccountAccessPolicy,
    ServiceAccountProjectAccessPolicy,
    UserProjectAccessPolicy,
    UserServiceAccountAccessPolicy,
)
from smaccess.domain.entities.access_policy import ensure_unique, granted_resource
from smaccess.domain.exceptions import BadRequest, NotFound
from smaccess.domain.value_objects import GrantedResourceType

logger = logging.getLogger(__name__)


class CreateAccessPoliciesUseCase:
    """Grant a batch of access policies on one project or service account.

    The batch is all-or-nothing: every policy is validated before any is
    written, and the store rejects duplicates that slip past the checks.
    """

    def __init__(self, unit_of_work_factory: type, access_query: AccessQuery) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_query = access_query

    async def create_for_project(
        self,
        context: CurrentContext,
        project_id: UUID,
        policies: list[BaseAccessPolicy],
        user_id: UUID,
    ) -> list[BaseAccessPolicy]:
        """Create policies granting access to a project; return all its policies."""
        async with self._uow_factory() as uow:
            project = await uow.projects.get_by_id(project_id)
        if not project:
            raise NotFound("Project", str(project_id))

        await ensure_write_access(
            self._access_query,
            context,
            GrantedResourceType.PROJECT,
            project.id,
            project.organization_id,
            user_id,
        )
        return await self._create(
            GrantedResourceType.PROJECT, project.id, project.organization_id, policies
        )

    async def create_for_service_account(
        self,
        context: CurrentContext,
        service_account_id: UUID,
        policies: list[BaseAccessPolicy],
        user_id: UUID,
    ) -> list[BaseAccessPolicy]:
        """Create policies granting access to a service account; return all its policies."""
        async with self._uow_factory() as uow:
            service_account = await uow.service_accounts.get_by_id(service_account_id)
        if not service_account:
            raise NotFound("ServiceAccount", str(service_account_id))

        await ensure_write_access(
            self._access_query,
            context,
            GrantedResourceType.SERVICE_ACCOUNT,
            service_account.id,
            service_account.organization_id,
            user_id,
        )
        return await self._create(
            GrantedResourceType.SERVICE_ACCOUNT,
            service_account.id,
            service_account.organization_id,
            policies,
        )

    async def _create(
        self,
        resource_type: GrantedResourceType,
        resource_id: UUID,
        organization_id: UUID,
        policies: list[BaseAccessPolicy],
    ) -> list[BaseAccessPolicy]:
        for policy in policies:
            if granted_resource(policy) != (resource_type, resource_id):
                raise BadRequest("Access policy does not target this resource")
        ensure_unique(policies)

        async with self._uow_factory() as uow:
            if not await _subjects_in_organization(uow, policies, organization_id):
                raise BadRequest("Access policy subjects must belong to the resource's organization")

            for policy in policies:
                if await uow.access_policies.exists(policy):
                    raise BadRequest("Resource already exists")

            await uow.access_policies.create_many(policies)
            logger.info(
                "Created %d access policies on %s %s", len(policies), resource_type, resource_id
            )
            if resource_type == GrantedResourceType.PROJECT:
                return await uow.access_policies.list_by_granted_project(resource_id)
            return await uow.access_policies.list_by_granted_service_account(resource_id)


async def _subjects_in_organization(
    uow, policies: list[BaseAccessPolicy], organization_id: UUID
) -> bool:
    """Every member, group and service account granted access must exist in the organization."""
    org_user_ids = [
        p.organization_user_id
        for p in policies
        if isinstance(p, UserProjectAccessPolicy | UserServiceAccountAccessPolicy)
    ]
    group_ids = [
        p.group_id
        for p in policies
        if isinstance(p, GroupProjectAccessPolicy | GroupServiceAccountAccessPolicy)
    ]
    service_account_ids = [
        p.service_account_id for p in policies if isinstance(p, ServiceAccountProjectAccessPolicy)
    ]

    if org_user_ids:
        org_users = await uow.organization_users.get_many(org_user_ids)
        if len(org_users) != len(org_user_ids) or any(
            u.organization_id != organization_id for u in org_users
        ):
            logger.info("Organization users are missing or outside organization %s", organization_id)
            return False

    if group_ids:
        groups = await uow.groups.get_many_by_ids(group_ids)
        if len(groups) != len(group_ids) or any(
            g.organization_id != organization_id for g in groups
        ):
            logger.info("Groups are missing or outside organization %s", organization_id)
            return False

    for service_account_id in service_account_ids:
        service_account = await uow.service_accounts.get_by_id(service_account_id)
        if not service_account or service_account.organization_id != organization_id:
            logger.info(
                "Service account %s is missing or outside organization %s",
                service_account_id,
                organization_id,
            )
            return False
    return True
