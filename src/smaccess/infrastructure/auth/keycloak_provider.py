"""Keycloak OIDC provider for token validation."""

import logging
from dataclasses import dataclass, field

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated caller from an introspected OIDC token."""

    user_id: str
    email: str | None
    username: str | None
    client_type: str = "user"
    org_owner: list[str] = field(default_factory=list)
    org_admin: list[str] = field(default_factory=list)
    org_user: list[str] = field(default_factory=list)
    org_custom: list[str] = field(default_factory=list)
    access_secrets_manager: list[str] = field(default_factory=list)


def _claim_list(token_info: dict, name: str) -> list[str]:
    value = token_info.get(name) or []
    if isinstance(value, str):
        return [value]
    return list(value)


class KeycloakProvider:
    """Keycloak OIDC - validates tokens and extracts caller claims."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect token, return caller info or None if inactive/invalid."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active"):
            return None
        return OIDCUser(
            user_id=token_info.get("sub", ""),
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
            client_type=token_info.get("client_type", "user"),
            org_owner=_claim_list(token_info, "orgowner"),
            org_admin=_claim_list(token_info, "orgadmin"),
            org_user=_claim_list(token_info, "orguser"),
            org_custom=_claim_list(token_info, "orgcustom"),
            access_secrets_manager=_claim_list(token_info, "accesssecretsmanager"),
        )
