"""Organization membership types."""

from enum import StrEnum


class OrganizationUserType(StrEnum):
    """Role of a member inside an organization."""

    OWNER = "owner"
    ADMIN = "admin"
    USER = "user"
    CUSTOM = "custom"
