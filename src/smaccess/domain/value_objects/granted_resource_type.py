"""Resource kinds that access policies can grant."""

from enum import StrEnum


class GrantedResourceType(StrEnum):
    """Kind of resource on the receiving end of an access policy."""

    PROJECT = "project"
    SERVICE_ACCOUNT = "service_account"
