"""Client type of the authenticated caller."""

from enum import StrEnum


class ClientType(StrEnum):
    """Kind of credential the request was made with."""

    USER = "user"
    ORGANIZATION = "organization"
    SERVICE_ACCOUNT = "service_account"
