"""Request-scoped caller context.

Built once per request from the authenticated token and passed explicitly
into every use case and authorization handler.
"""

from dataclasses import dataclass, field
from uuid import UUID

from smaccess.domain.value_objects import ClientType, OrganizationUserType


@dataclass(frozen=True)
class CurrentOrganization:
    """Caller's membership in one organization."""

    id: UUID
    type: OrganizationUserType
    access_secrets_manager: bool = False


@dataclass(frozen=True)
class CurrentContext:
    """Authenticated caller: user id (or service account id) and memberships."""

    user_id: UUID
    client_type: ClientType
    organizations: list[CurrentOrganization] = field(default_factory=list)

    def get_organization(self, organization_id: UUID) -> CurrentOrganization | None:
        for org in self.organizations:
            if org.id == organization_id:
                return org
        return None

    def access_secrets_manager(self, organization_id: UUID) -> bool:
        """True if Secrets Manager is enabled for the caller in this organization."""
        org = self.get_organization(organization_id)
        return org is not None and org.access_secrets_manager

    def organization_admin(self, organization_id: UUID) -> bool:
        """True if the caller is an owner or admin of the organization."""
        org = self.get_organization(organization_id)
        return org is not None and org.type in (
            OrganizationUserType.OWNER,
            OrganizationUserType.ADMIN,
        )
