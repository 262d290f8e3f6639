"""Access client resolution and access check queries."""

from smaccess.application.access.access_client import get_access_client, to_access_client
from smaccess.application.access.access_query import AccessQuery, combine_access

__all__ = [
    "AccessQuery",
    "combine_access",
    "get_access_client",
    "to_access_client",
]
