"""Domain value objects."""

from smaccess.domain.value_objects.access_client_type import AccessClientType
from smaccess.domain.value_objects.access_policy_operation import AccessPolicyOperation
from smaccess.domain.value_objects.client_type import ClientType
from smaccess.domain.value_objects.granted_resource_type import GrantedResourceType
from smaccess.domain.value_objects.organization_user_type import OrganizationUserType

__all__ = [
    "AccessClientType",
    "AccessPolicyOperation",
    "ClientType",
    "GrantedResourceType",
    "OrganizationUserType",
]
