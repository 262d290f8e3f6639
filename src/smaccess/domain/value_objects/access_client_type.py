"""Access client strategies for Secrets Manager checks."""

from enum import StrEnum


class AccessClientType(StrEnum):
    """How access to a resource is decided for the current caller.

    NO_ACCESS_CHECK bypasses policy lookups (org owners/admins, org API keys).
    USER requires an explicit or group-inherited access policy.
    ORGANIZATION and SERVICE_ACCOUNT are machine callers.
    """

    NO_ACCESS_CHECK = "no_access_check"
    USER = "user"
    ORGANIZATION = "organization"
    SERVICE_ACCOUNT = "service_account"
