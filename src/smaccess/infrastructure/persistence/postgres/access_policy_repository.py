"""PostgreSQL access policy repository implementation.

All variants live in one access_policy table tagged by discriminator. Partial
unique indexes on (subject, resource) per discriminator reject duplicate
grants; the violation is surfaced as BadRequest.
"""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from smaccess.domain.entities import (
    BaseAccessPolicy,
    GroupProjectAccessPolicy,
    GroupServiceAccountAccessPolicy,
    ProjectPeopleAccessPolicies,
    ServiceAccountPeopleAccessPolicies,
    ServiceAccountProjectAccessPolicy,
    UserProjectAccessPolicy,
    UserServiceAccountAccessPolicy,
)
from smaccess.domain.exceptions import BadRequest

USER_PROJECT = "user_project"
GROUP_PROJECT = "group_project"
SERVICE_ACCOUNT_PROJECT = "service_account_project"
USER_SERVICE_ACCOUNT = "user_service_account"
GROUP_SERVICE_ACCOUNT = "group_service_account"

_COLUMNS = (
    "id, discriminator, organization_user_id, group_id, service_account_id, "
    "granted_project_id, granted_service_account_id, read, write, creation_date, revision_date"
)

# Memberships are taken only from the organization that owns the resource.
_RESOURCE_ORGANIZATION = "SELECT organization_id FROM {table} WHERE id = %s"
_USER_IDS_SUBQUERY = (
    "SELECT ou.id FROM organization_user ou "
    "WHERE ou.user_id = %s AND ou.organization_id = ({organization})"
)
_GROUP_IDS_SUBQUERY = (
    "SELECT gu.group_id FROM group_user gu "
    "JOIN organization_user ou ON ou.id = gu.organization_user_id "
    "WHERE ou.user_id = %s AND ou.organization_id = ({organization})"
)


def _policy_columns(policy: BaseAccessPolicy) -> tuple[str, dict[str, UUID]]:
    """Discriminator and (subject, resource) column values for a policy."""
    if isinstance(policy, UserProjectAccessPolicy):
        return USER_PROJECT, {
            "organization_user_id": policy.organization_user_id,
            "granted_project_id": policy.granted_project_id,
        }
    if isinstance(policy, GroupProjectAccessPolicy):
        return GROUP_PROJECT, {
            "group_id": policy.group_id,
            "granted_project_id": policy.granted_project_id,
        }
    if isinstance(policy, ServiceAccountProjectAccessPolicy):
        return SERVICE_ACCOUNT_PROJECT, {
            "service_account_id": policy.service_account_id,
            "granted_project_id": policy.granted_project_id,
        }
    if isinstance(policy, UserServiceAccountAccessPolicy):
        return USER_SERVICE_ACCOUNT, {
            "organization_user_id": policy.organization_user_id,
            "granted_service_account_id": policy.granted_service_account_id,
        }
    if isinstance(policy, GroupServiceAccountAccessPolicy):
        return GROUP_SERVICE_ACCOUNT, {
            "group_id": policy.group_id,
            "granted_service_account_id": policy.granted_service_account_id,
        }
    raise TypeError(f"Unsupported access policy type provided: {type(policy).__name__}")


def _row_to_policy(r: tuple) -> BaseAccessPolicy:
    common = {
        "id": r[0],
        "read": r[7],
        "write": r[8],
        "creation_date": r[9],
        "revision_date": r[10],
    }
    discriminator = r[1]
    if discriminator == USER_PROJECT:
        return UserProjectAccessPolicy(organization_user_id=r[2], granted_project_id=r[5], **common)
    if discriminator == GROUP_PROJECT:
        return GroupProjectAccessPolicy(group_id=r[3], granted_project_id=r[5], **common)
    if discriminator == SERVICE_ACCOUNT_PROJECT:
        return ServiceAccountProjectAccessPolicy(
            service_account_id=r[4], granted_project_id=r[5], **common
        )
    if discriminator == USER_SERVICE_ACCOUNT:
        return UserServiceAccountAccessPolicy(
            organization_user_id=r[2], granted_service_account_id=r[6], **common
        )
    if discriminator == GROUP_SERVICE_ACCOUNT:
        return GroupServiceAccountAccessPolicy(
            group_id=r[3], granted_service_account_id=r[6], **common
        )
    raise ValueError(f"Unknown access policy discriminator: {discriminator}")


class PostgresAccessPolicyRepository:
    """Access policy repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, policy_id: UUID) -> BaseAccessPolicy | None:
        """Get access policy by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM access_policy WHERE id = %s",
            (policy_id,),
        )
        r = await cur.fetchone()
        return _row_to_policy(r) if r else None

    async def exists(self, policy: BaseAccessPolicy) -> bool:
        """True if a policy with the same subject and resource is stored."""
        discriminator, columns = _policy_columns(policy)
        where = " AND ".join(f"{name} = %s" for name in columns)
        cur = await self._conn.execute(
            f"SELECT 1 FROM access_policy WHERE discriminator = %s AND {where} LIMIT 1",
            (discriminator, *columns.values()),
        )
        return await cur.fetchone() is not None

    async def create_many(self, policies: list[BaseAccessPolicy]) -> list[BaseAccessPolicy]:
        """Insert policies. Raises BadRequest if any (subject, resource) already exists."""
        try:
            for policy in policies:
                discriminator, columns = _policy_columns(policy)
                names = ", ".join(columns)
                placeholders = ", ".join(["%s"] * len(columns))
                await self._conn.execute(
                    f"INSERT INTO access_policy (id, discriminator, {names}, read, write, "
                    f"creation_date, revision_date) VALUES (%s, %s, {placeholders}, %s, %s, %s, %s)",
                    (
                        policy.id,
                        discriminator,
                        *columns.values(),
                        policy.read,
                        policy.write,
                        policy.creation_date,
                        policy.revision_date,
                    ),
                )
        except UniqueViolation as e:
            raise BadRequest("Resource already exists") from e
        return policies

    async def update(self, policy: BaseAccessPolicy) -> None:
        """Update read/write flags."""
        await self._conn.execute(
            "UPDATE access_policy SET read=%s, write=%s, revision_date=%s WHERE id=%s",
            (policy.read, policy.write, policy.revision_date, policy.id),
        )

    async def delete(self, policy_id: UUID) -> None:
        """Delete access policy."""
        await self._conn.execute(
            "DELETE FROM access_policy WHERE id = %s",
            (policy_id,),
        )

    async def list_by_granted_project(self, project_id: UUID) -> list[BaseAccessPolicy]:
        """List all policies granting access to a project."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM access_policy WHERE granted_project_id = %s "
            "ORDER BY creation_date, id",
            (project_id,),
        )
        return [_row_to_policy(r) for r in await cur.fetchall()]

    async def list_by_granted_service_account(
        self, service_account_id: UUID
    ) -> list[BaseAccessPolicy]:
        """List all policies granting access to a service account."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM access_policy WHERE granted_service_account_id = %s "
            "ORDER BY creation_date, id",
            (service_account_id,),
        )
        return [_row_to_policy(r) for r in await cur.fetchall()]

    async def list_for_user_on_project(
        self, project_id: UUID, user_id: UUID
    ) -> list[BaseAccessPolicy]:
        """Direct and group-inherited policies of a user on a project."""
        return await self._list_for_user(
            "project", "granted_project_id", USER_PROJECT, GROUP_PROJECT, project_id, user_id
        )

    async def list_for_user_on_service_account(
        self, service_account_id: UUID, user_id: UUID
    ) -> list[BaseAccessPolicy]:
        """Direct and group-inherited policies of a user on a service account."""
        return await self._list_for_user(
            "service_account",
            "granted_service_account_id",
            USER_SERVICE_ACCOUNT,
            GROUP_SERVICE_ACCOUNT,
            service_account_id,
            user_id,
        )

    async def list_for_service_account_on_project(
        self, project_id: UUID, service_account_id: UUID
    ) -> list[BaseAccessPolicy]:
        """Policies of a service account on a project."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM access_policy "
            "WHERE discriminator = %s AND granted_project_id = %s AND service_account_id = %s",
            (SERVICE_ACCOUNT_PROJECT, project_id, service_account_id),
        )
        return [_row_to_policy(r) for r in await cur.fetchall()]

    async def replace_project_people(self, people: ProjectPeopleAccessPolicies) -> None:
        """Replace user and group policies on a project."""
        await self._conn.execute(
            "DELETE FROM access_policy WHERE granted_project_id = %s AND discriminator IN (%s, %s)",
            (people.id, USER_PROJECT, GROUP_PROJECT),
        )
        await self.create_many([*people.user_access_policies, *people.group_access_policies])

    async def replace_service_account_people(
        self, people: ServiceAccountPeopleAccessPolicies
    ) -> None:
        """Replace user and group policies on a service account."""
        await self._conn.execute(
            "DELETE FROM access_policy "
            "WHERE granted_service_account_id = %s AND discriminator IN (%s, %s)",
            (people.id, USER_SERVICE_ACCOUNT, GROUP_SERVICE_ACCOUNT),
        )
        await self.create_many([*people.user_access_policies, *people.group_access_policies])

    async def _list_for_user(
        self,
        resource_table: str,
        resource_column: str,
        user_discriminator: str,
        group_discriminator: str,
        resource_id: UUID,
        user_id: UUID,
    ) -> list[BaseAccessPolicy]:
        organization = _RESOURCE_ORGANIZATION.format(table=resource_table)
        user_ids = _USER_IDS_SUBQUERY.format(organization=organization)
        group_ids = _GROUP_IDS_SUBQUERY.format(organization=organization)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM access_policy WHERE {resource_column} = %s AND ("
            f"(discriminator = %s AND organization_user_id IN ({user_ids})) "
            f"OR (discriminator = %s AND group_id IN ({group_ids})))",
            (
                resource_id,
                user_discriminator,
                user_id,
                resource_id,
                group_discriminator,
                user_id,
                resource_id,
            ),
        )
        return [_row_to_policy(r) for r in await cur.fetchall()]
