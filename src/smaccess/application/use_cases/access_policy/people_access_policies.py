"""Get and replace the people (user and group) access policies of a resource."""

import logging
from uuid import UUID

from smaccess.application.authorization import PeopleAccessPoliciesAuthorizationHandler
from smaccess.application.context import CurrentContext
from smaccess.domain.entities import (
    GroupProjectAccessPolicy,
    GroupServiceAccountAccessPolicy,
    ProjectPeopleAccessPolicies,
    ServiceAccountPeopleAccessPolicies,
    UserProjectAccessPolicy,
    UserServiceAccountAccessPolicy,
)
from smaccess.domain.entities.access_policy import ensure_unique
from smaccess.domain.exceptions import NotFound
from smaccess.domain.value_objects import AccessPolicyOperation

logger = logging.getLogger(__name__)


async def load_project_people(uow, project_id: UUID) -> ProjectPeopleAccessPolicies | None:
    project = await uow.projects.get_by_id(project_id)
    if not project:
        return None
    policies = await uow.access_policies.list_by_granted_project(project_id)
    return ProjectPeopleAccessPolicies(
        id=project.id,
        organization_id=project.organization_id,
        user_access_policies=[p for p in policies if isinstance(p, UserProjectAccessPolicy)],
        group_access_policies=[p for p in policies if isinstance(p, GroupProjectAccessPolicy)],
    )


async def load_service_account_people(
    uow, service_account_id: UUID
) -> ServiceAccountPeopleAccessPolicies | None:
    service_account = await uow.service_accounts.get_by_id(service_account_id)
    if not service_account:
        return None
    policies = await uow.access_policies.list_by_granted_service_account(service_account_id)
    return ServiceAccountPeopleAccessPolicies(
        id=service_account.id,
        organization_id=service_account.organization_id,
        user_access_policies=[
            p for p in policies if isinstance(p, UserServiceAccountAccessPolicy)
        ],
        group_access_policies=[
            p for p in policies if isinstance(p, GroupServiceAccountAccessPolicy)
        ],
    )


class _PeopleAccessPoliciesUseCase:
    def __init__(
        self,
        unit_of_work_factory: type,
        authorization_handler: PeopleAccessPoliciesAuthorizationHandler,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._authorization = authorization_handler

    async def _authorize(
        self,
        context: CurrentContext,
        people: ProjectPeopleAccessPolicies | ServiceAccountPeopleAccessPolicies,
        operation: AccessPolicyOperation,
        resource_name: str,
    ) -> None:
        result = await self._authorization.handle(context, people, operation)
        if not result.succeeded:
            raise NotFound(resource_name, str(people.id))


class GetPeopleAccessPoliciesUseCase(_PeopleAccessPoliciesUseCase):
    """Return users and groups with access to a resource the caller can read."""

    async def for_project(
        self, context: CurrentContext, project_id: UUID
    ) -> ProjectPeopleAccessPolicies:
        async with self._uow_factory() as uow:
            people = await load_project_people(uow, project_id)
        if people is None:
            raise NotFound("Project", str(project_id))
        await self._authorize(context, people, AccessPolicyOperation.READ, "Project")
        return people

    async def for_service_account(
        self, context: CurrentContext, service_account_id: UUID
    ) -> ServiceAccountPeopleAccessPolicies:
        async with self._uow_factory() as uow:
            people = await load_service_account_people(uow, service_account_id)
        if people is None:
            raise NotFound("ServiceAccount", str(service_account_id))
        await self._authorize(context, people, AccessPolicyOperation.READ, "ServiceAccount")
        return people


class ReplacePeopleAccessPoliciesUseCase(_PeopleAccessPoliciesUseCase):
    """Set the exact users and groups with access to a resource.

    Prior user and group grants on the resource are replaced in one unit of
    work; service account grants are left alone.
    """

    async def for_project(
        self,
        context: CurrentContext,
        project_id: UUID,
        user_access_policies: list[UserProjectAccessPolicy],
        group_access_policies: list[GroupProjectAccessPolicy],
    ) -> ProjectPeopleAccessPolicies:
        ensure_unique([*user_access_policies, *group_access_policies])
        async with self._uow_factory() as uow:
            current = await load_project_people(uow, project_id)
        if current is None:
            raise NotFound("Project", str(project_id))

        people = ProjectPeopleAccessPolicies(
            id=current.id,
            organization_id=current.organization_id,
            user_access_policies=user_access_policies,
            group_access_policies=group_access_policies,
        )
        await self._authorize(context, people, AccessPolicyOperation.REPLACE, "Project")

        async with self._uow_factory() as uow:
            await uow.access_policies.replace_project_people(people)
            replaced = await load_project_people(uow, project_id)
        logger.info(
            "Replaced people on project %s: %d users, %d groups",
            project_id,
            len(user_access_policies),
            len(group_access_policies),
        )
        return replaced

    async def for_service_account(
        self,
        context: CurrentContext,
        service_account_id: UUID,
        user_access_policies: list[UserServiceAccountAccessPolicy],
        group_access_policies: list[GroupServiceAccountAccessPolicy],
    ) -> ServiceAccountPeopleAccessPolicies:
        ensure_unique([*user_access_policies, *group_access_policies])
        async with self._uow_factory() as uow:
            current = await load_service_account_people(uow, service_account_id)
        if current is None:
            raise NotFound("ServiceAccount", str(service_account_id))

        people = ServiceAccountPeopleAccessPolicies(
            id=current.id,
            organization_id=current.organization_id,
            user_access_policies=user_access_policies,
            group_access_policies=group_access_policies,
        )
        await self._authorize(context, people, AccessPolicyOperation.REPLACE, "ServiceAccount")

        async with self._uow_factory() as uow:
            await uow.access_policies.replace_service_account_people(people)
            replaced = await load_service_account_people(uow, service_account_id)
        logger.info(
            "Replaced people on service account %s: %d users, %d groups",
            service_account_id,
            len(user_access_policies),
            len(group_access_policies),
        )
        return replaced
