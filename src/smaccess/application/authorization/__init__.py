"""Authorization handlers."""

from smaccess.application.authorization.authorization_result import AuthorizationResult
from smaccess.application.authorization.people_access_policies_handler import (
    PeopleAccessPoliciesAuthorizationHandler,
)

__all__ = [
    "AuthorizationResult",
    "PeopleAccessPoliciesAuthorizationHandler",
]
