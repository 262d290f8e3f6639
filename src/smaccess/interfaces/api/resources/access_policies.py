"""Access policies API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from smaccess.application.use_cases.access_policy.create_access_policies import (
    CreateAccessPoliciesUseCase,
)
from smaccess.application.use_cases.access_policy.delete_access_policy import (
    DeleteAccessPolicyUseCase,
)
from smaccess.application.use_cases.access_policy.people_access_policies import (
    GetPeopleAccessPoliciesUseCase,
    ReplacePeopleAccessPoliciesUseCase,
)
from smaccess.application.use_cases.access_policy.update_access_policy import (
    UpdateAccessPolicyUseCase,
)
from smaccess.domain.entities import (
    BaseAccessPolicy,
    GroupProjectAccessPolicy,
    GroupServiceAccountAccessPolicy,
    ProjectPeopleAccessPolicies,
    ServiceAccountPeopleAccessPolicies,
    ServiceAccountProjectAccessPolicy,
    UserProjectAccessPolicy,
    UserServiceAccountAccessPolicy,
)
from smaccess.domain.entities.access_policy import validate_permissions
from smaccess.domain.exceptions import BadRequest, NotFound
from smaccess.interfaces.api.resources.common import (
    parse_uuid,
    policy_to_dict,
    require_context,
    set_error,
)


def _flag(data: dict, name: str) -> bool:
    """Read a permission flag; only JSON booleans are accepted."""
    value = data.get(name, False)
    if not isinstance(value, bool):
        raise BadRequest(f"'{name}' must be a boolean")
    return value


def _parse_grants(items: list | None) -> list[tuple[UUID, bool, bool]]:
    """Parse [{"grantee_id", "read", "write"}] into (grantee, read, write) tuples."""
    grants = []
    for item in items or []:
        try:
            grantee_id = UUID(item["grantee_id"])
        except (KeyError, TypeError, ValueError) as e:
            raise BadRequest(f"Invalid access policy request: {e}") from e
        read = _flag(item, "read")
        write = _flag(item, "write")
        validate_permissions(read, write)
        grants.append((grantee_id, read, write))
    return grants


def _project_policies(body: dict, project_id: UUID) -> list[BaseAccessPolicy]:
    policies: list[BaseAccessPolicy] = []
    for grantee, read, write in _parse_grants(body.get("user_access_policy_requests")):
        policies.append(UserProjectAccessPolicy(
            organization_user_id=grantee, granted_project_id=project_id, read=read, write=write
        ))
    for grantee, read, write in _parse_grants(body.get("group_access_policy_requests")):
        policies.append(GroupProjectAccessPolicy(
            group_id=grantee, granted_project_id=project_id, read=read, write=write
        ))
    for grantee, read, write in _parse_grants(body.get("service_account_access_policy_requests")):
        policies.append(ServiceAccountProjectAccessPolicy(
            service_account_id=grantee, granted_project_id=project_id, read=read, write=write
        ))
    return policies


def _service_account_policies(body: dict, service_account_id: UUID) -> list[BaseAccessPolicy]:
    policies: list[BaseAccessPolicy] = []
    for grantee, read, write in _parse_grants(body.get("user_access_policy_requests")):
        policies.append(UserServiceAccountAccessPolicy(
            organization_user_id=grantee,
            granted_service_account_id=service_account_id,
            read=read,
            write=write,
        ))
    for grantee, read, write in _parse_grants(body.get("group_access_policy_requests")):
        policies.append(GroupServiceAccountAccessPolicy(
            group_id=grantee,
            granted_service_account_id=service_account_id,
            read=read,
            write=write,
        ))
    return policies


def _people_to_dict(
    people: ProjectPeopleAccessPolicies | ServiceAccountPeopleAccessPolicies,
) -> dict:
    return {
        "id": str(people.id),
        "organization_id": str(people.organization_id),
        "user_access_policies": [policy_to_dict(p) for p in people.user_access_policies],
        "group_access_policies": [policy_to_dict(p) for p in people.group_access_policies],
    }


class ProjectAccessPoliciesResource:
    """POST /v1/projects/{project_id}/access-policies - grant access to a project."""

    def __init__(self, create_access_policies: CreateAccessPoliciesUseCase) -> None:
        self._create = create_access_policies

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """Create access policies on the project."""
        context = require_context(req, resp)
        if not context:
            return
        proj_id = parse_uuid(project_id)
        if not proj_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid project ID"}
            return

        try:
            body = await req.get_media(default_when_empty={})
            policies = _project_policies(body, proj_id)
            created = await self._create.create_for_project(
                context, proj_id, policies, context.user_id
            )
            resp.media = {"items": [policy_to_dict(p) for p in created]}
            resp.status = falcon.HTTP_200
        except (NotFound, BadRequest) as e:
            set_error(resp, e)


class ServiceAccountAccessPoliciesResource:
    """POST /v1/service-accounts/{service_account_id}/access-policies."""

    def __init__(self, create_access_policies: CreateAccessPoliciesUseCase) -> None:
        self._create = create_access_policies

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        service_account_id: str,
    ) -> None:
        """Create access policies on the service account."""
        context = require_context(req, resp)
        if not context:
            return
        sa_id = parse_uuid(service_account_id)
        if not sa_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid service account ID"}
            return

        try:
            body = await req.get_media(default_when_empty={})
            policies = _service_account_policies(body, sa_id)
            created = await self._create.create_for_service_account(
                context, sa_id, policies, context.user_id
            )
            resp.media = {"items": [policy_to_dict(p) for p in created]}
            resp.status = falcon.HTTP_200
        except (NotFound, BadRequest) as e:
            set_error(resp, e)


class AccessPolicyResource:
    """PUT/DELETE /v1/access-policies/{policy_id} - change or revoke one grant."""

    def __init__(
        self,
        update_access_policy: UpdateAccessPolicyUseCase,
        delete_access_policy: DeleteAccessPolicyUseCase,
    ) -> None:
        self._update = update_access_policy
        self._delete = delete_access_policy

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        policy_id: str,
    ) -> None:
        """Update read/write flags."""
        context = require_context(req, resp)
        if not context:
            return
        ap_id = parse_uuid(policy_id)
        if not ap_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid access policy ID"}
            return

        try:
            body = await req.get_media(default_when_empty={})
            policy = await self._update.execute(
                context,
                ap_id,
                _flag(body, "read"),
                _flag(body, "write"),
                context.user_id,
            )
            resp.media = policy_to_dict(policy)
            resp.status = falcon.HTTP_200
        except (NotFound, BadRequest) as e:
            set_error(resp, e)

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        policy_id: str,
    ) -> None:
        """Delete access policy."""
        context = require_context(req, resp)
        if not context:
            return
        ap_id = parse_uuid(policy_id)
        if not ap_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid access policy ID"}
            return

        try:
            await self._delete.execute(context, ap_id, context.user_id)
            resp.status = falcon.HTTP_204
        except NotFound as e:
            set_error(resp, e)


class ProjectPeopleAccessPoliciesResource:
    """GET/PUT /v1/projects/{project_id}/access-policies/people."""

    def __init__(
        self,
        get_people: GetPeopleAccessPoliciesUseCase,
        replace_people: ReplacePeopleAccessPoliciesUseCase,
    ) -> None:
        self._get = get_people
        self._replace = replace_people

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        context = require_context(req, resp)
        if not context:
            return
        proj_id = parse_uuid(project_id)
        if not proj_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid project ID"}
            return

        try:
            people = await self._get.for_project(context, proj_id)
            resp.media = _people_to_dict(people)
            resp.status = falcon.HTTP_200
        except NotFound as e:
            set_error(resp, e)

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        """Replace the users and groups with access to the project."""
        context = require_context(req, resp)
        if not context:
            return
        proj_id = parse_uuid(project_id)
        if not proj_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid project ID"}
            return

        try:
            body = await req.get_media(default_when_empty={})
            policies = _project_policies(
                {
                    "user_access_policy_requests": body.get("user_access_policy_requests"),
                    "group_access_policy_requests": body.get("group_access_policy_requests"),
                },
                proj_id,
            )
            people = await self._replace.for_project(
                context,
                proj_id,
                [p for p in policies if isinstance(p, UserProjectAccessPolicy)],
                [p for p in policies if isinstance(p, GroupProjectAccessPolicy)],
            )
            resp.media = _people_to_dict(people)
            resp.status = falcon.HTTP_200
        except (NotFound, BadRequest) as e:
            set_error(resp, e)


class ServiceAccountPeopleAccessPoliciesResource:
    """GET/PUT /v1/service-accounts/{service_account_id}/access-policies/people."""

    def __init__(
        self,
        get_people: GetPeopleAccessPoliciesUseCase,
        replace_people: ReplacePeopleAccessPoliciesUseCase,
    ) -> None:
        self._get = get_people
        self._replace = replace_people

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        service_account_id: str,
    ) -> None:
        context = require_context(req, resp)
        if not context:
            return
        sa_id = parse_uuid(service_account_id)
        if not sa_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid service account ID"}
            return

        try:
            people = await self._get.for_service_account(context, sa_id)
            resp.media = _people_to_dict(people)
            resp.status = falcon.HTTP_200
        except NotFound as e:
            set_error(resp, e)

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        service_account_id: str,
    ) -> None:
        """Replace the users and groups with access to the service account."""
        context = require_context(req, resp)
        if not context:
            return
        sa_id = parse_uuid(service_account_id)
        if not sa_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid service account ID"}
            return

        try:
            body = await req.get_media(default_when_empty={})
            policies = _service_account_policies(body, sa_id)
            people = await self._replace.for_service_account(
                context,
                sa_id,
                [p for p in policies if isinstance(p, UserServiceAccountAccessPolicy)],
                [p for p in policies if isinstance(p, GroupServiceAccountAccessPolicy)],
            )
            resp.media = _people_to_dict(people)
            resp.status = falcon.HTTP_200
        except (NotFound, BadRequest) as e:
            set_error(resp, e)
