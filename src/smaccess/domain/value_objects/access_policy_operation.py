"""Operations that can be requested against access policies."""

from enum import StrEnum


class AccessPolicyOperation(StrEnum):
    """Operation requirement passed to authorization handlers."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    REPLACE = "replace"
