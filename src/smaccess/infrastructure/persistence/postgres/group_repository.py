"""PostgreSQL group repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from smaccess.domain.entities import Group


class PostgresGroupRepository:
    """Group repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_many_by_ids(self, group_ids: list[UUID]) -> list[Group]:
        """Get groups by ids. Unknown ids are skipped."""
        cur = await self._conn.execute(
            'SELECT id, organization_id, name FROM "group" WHERE id = ANY(%s)',
            (list(group_ids),),
        )
        rows = await cur.fetchall()
        return [Group(id=r[0], organization_id=r[1], name=r[2]) for r in rows]
