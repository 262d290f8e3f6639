"""Auth middleware - builds the request's CurrentContext from the bearer token."""

import logging
from uuid import UUID

import falcon.asgi

from smaccess.application.context import CurrentContext, CurrentOrganization
from smaccess.domain.value_objects import ClientType, OrganizationUserType
from smaccess.infrastructure.auth.keycloak_provider import OIDCUser

logger = logging.getLogger(__name__)


def context_from_user(user: OIDCUser) -> CurrentContext:
    """Translate token claims into a CurrentContext. Raises ValueError on bad claims."""
    sm_orgs = {UUID(org_id) for org_id in user.access_secrets_manager}
    organizations: dict[UUID, CurrentOrganization] = {}
    # Highest role wins when an organization appears in several claims.
    for claim, org_type in (
        (user.org_custom, OrganizationUserType.CUSTOM),
        (user.org_user, OrganizationUserType.USER),
        (user.org_admin, OrganizationUserType.ADMIN),
        (user.org_owner, OrganizationUserType.OWNER),
    ):
        for org_id in claim:
            org_uuid = UUID(org_id)
            organizations[org_uuid] = CurrentOrganization(
                id=org_uuid,
                type=org_type,
                access_secrets_manager=org_uuid in sm_orgs,
            )
    return CurrentContext(
        user_id=UUID(user.user_id),
        client_type=ClientType(user.client_type),
        organizations=list(organizations.values()),
    )


class AuthMiddleware:
    """Middleware that validates the token and sets req.context.current."""

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Set req.context.current to a CurrentContext, or None if unauthenticated."""
        req.context.current = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return

        user = self._keycloak.decode_token(auth[7:])
        if not user:
            return
        try:
            req.context.current = context_from_user(user)
        except ValueError:
            logger.warning("Rejected token with malformed claims for subject %s", user.user_id)
