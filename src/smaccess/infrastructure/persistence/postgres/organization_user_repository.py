"""PostgreSQL organization user repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from smaccess.domain.entities import OrganizationUser
from smaccess.domain.value_objects import OrganizationUserType


class PostgresOrganizationUserRepository:
    """Organization user repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_many(self, organization_user_ids: list[UUID]) -> list[OrganizationUser]:
        """Get organization users by ids. Unknown ids are skipped."""
        cur = await self._conn.execute(
            "SELECT id, organization_id, user_id, type FROM organization_user WHERE id = ANY(%s)",
            (list(organization_user_ids),),
        )
        rows = await cur.fetchall()
        return [
            OrganizationUser(
                id=r[0],
                organization_id=r[1],
                user_id=r[2],
                type=OrganizationUserType(r[3]),
            )
            for r in rows
        ]
