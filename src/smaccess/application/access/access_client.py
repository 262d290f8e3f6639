"""Access client resolution - which access strategy applies to the caller."""

from uuid import UUID

from smaccess.application.context import CurrentContext
from smaccess.domain.value_objects import AccessClientType, ClientType


def to_access_client(client_type: ClientType, is_org_admin: bool = False) -> AccessClientType:
    """Map the caller's client type and admin flag to an access strategy.

    Organization owners and admins (including organization API keys, which
    carry owner membership) bypass policy checks.
    """
    if is_org_admin:
        return AccessClientType.NO_ACCESS_CHECK
    if client_type == ClientType.USER:
        return AccessClientType.USER
    if client_type == ClientType.ORGANIZATION:
        return AccessClientType.ORGANIZATION
    if client_type == ClientType.SERVICE_ACCOUNT:
        return AccessClientType.SERVICE_ACCOUNT
    raise ValueError(f"Unsupported client type: {client_type!r}")


def get_access_client(
    context: CurrentContext, organization_id: UUID
) -> tuple[AccessClientType, UUID]:
    """Resolve (access client, acting principal id) for the current caller."""
    access_client = to_access_client(
        context.client_type, context.organization_admin(organization_id)
    )
    return access_client, context.user_id
