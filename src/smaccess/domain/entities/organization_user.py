"""Organization user entity."""

from dataclasses import dataclass
from uuid import UUID

from smaccess.domain.value_objects import OrganizationUserType


@dataclass
class OrganizationUser:
    """Membership of a user in an organization."""

    id: UUID
    organization_id: UUID
    user_id: UUID | None
    type: OrganizationUserType = OrganizationUserType.USER
