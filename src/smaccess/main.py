"""Application entry point and composition root."""

import logging

import falcon
import falcon.asgi

from smaccess import __version__
from smaccess.application.access import AccessQuery
from smaccess.application.authorization import PeopleAccessPoliciesAuthorizationHandler
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
from smaccess.application.use_cases.project.update_project import UpdateProjectUseCase
from smaccess.application.use_cases.secret.update_secret import UpdateSecretUseCase
from smaccess.config import get_settings
from smaccess.infrastructure.auth.keycloak_provider import KeycloakProvider
from smaccess.infrastructure.persistence.postgres.connection import create_pool
from smaccess.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from smaccess.interfaces.api.middleware.auth import AuthMiddleware
from smaccess.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from smaccess.interfaces.api.resources.access_policies import (
    AccessPolicyResource,
    ProjectAccessPoliciesResource,
    ProjectPeopleAccessPoliciesResource,
    ServiceAccountAccessPoliciesResource,
    ServiceAccountPeopleAccessPoliciesResource,
)
from smaccess.interfaces.api.resources.health import HealthResource
from smaccess.interfaces.api.resources.projects import ProjectResource
from smaccess.interfaces.api.resources.secrets import SecretResource

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    print(f"smaccess v{__version__}")


def add_routes(app: falcon.asgi.App, uow_factory, pool=None) -> None:
    """Wire use cases and resources onto the app."""
    access_query = AccessQuery(uow_factory)
    authorization_handler = PeopleAccessPoliciesAuthorizationHandler(uow_factory, access_query)

    create_access_policies = CreateAccessPoliciesUseCase(uow_factory, access_query)
    update_access_policy = UpdateAccessPolicyUseCase(uow_factory, access_query)
    delete_access_policy = DeleteAccessPolicyUseCase(uow_factory, access_query)
    get_people = GetPeopleAccessPoliciesUseCase(uow_factory, authorization_handler)
    replace_people = ReplacePeopleAccessPoliciesUseCase(uow_factory, authorization_handler)
    update_project = UpdateProjectUseCase(uow_factory, access_query)
    update_secret = UpdateSecretUseCase(uow_factory, access_query)

    health_resource = HealthResource(pool)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route(
        "/v1/projects/{project_id}/access-policies",
        ProjectAccessPoliciesResource(create_access_policies),
    )
    app.add_route(
        "/v1/service-accounts/{service_account_id}/access-policies",
        ServiceAccountAccessPoliciesResource(create_access_policies),
    )
    app.add_route(
        "/v1/access-policies/{policy_id}",
        AccessPolicyResource(update_access_policy, delete_access_policy),
    )
    app.add_route(
        "/v1/projects/{project_id}/access-policies/people",
        ProjectPeopleAccessPoliciesResource(get_people, replace_people),
    )
    app.add_route(
        "/v1/service-accounts/{service_account_id}/access-policies/people",
        ServiceAccountPeopleAccessPoliciesResource(get_people, replace_people),
    )
    app.add_route(
        "/v1/projects/{project_id}",
        ProjectResource(uow_factory, access_query, update_project),
    )
    app.add_route("/v1/secrets/{secret_id}", SecretResource(update_secret))


def create_smaccess_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set; all requests will be unauthenticated")

    app = falcon.asgi.App(
        middleware=[
            PoolLifespanMiddleware(pool, wait_timeout=None if settings.debug else 30.0),
            AuthMiddleware(keycloak),
        ],
    )

    async def log_exception(req, resp, ex, params):
        logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
        resp.status = falcon.HTTP_500
        resp.media = {"title": "500 Internal Server Error"}

    app.add_error_handler(Exception, log_exception)
    add_routes(app, uow_factory, pool)
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_smaccess_app(), host=settings.host, port=settings.port)
