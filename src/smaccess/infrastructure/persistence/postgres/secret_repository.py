"""PostgreSQL secret repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from smaccess.domain.entities import Secret


class PostgresSecretRepository:
    """Secret repository implementation. Project links live in project_secret."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, secret_id: UUID) -> Secret | None:
        """Get secret by id, excluding soft-deleted."""
        cur = await self._conn.execute(
            "SELECT id, organization_id, key, value, note, creation_date, revision_date, deleted_date "
            "FROM secret WHERE id = %s AND deleted_date IS NULL",
            (secret_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        cur = await self._conn.execute(
            "SELECT project_id FROM project_secret WHERE secret_id = %s ORDER BY project_id",
            (secret_id,),
        )
        project_rows = await cur.fetchall()
        return Secret(
            id=r[0],
            organization_id=r[1],
            key=r[2],
            value=r[3],
            note=r[4],
            creation_date=r[5],
            revision_date=r[6],
            deleted_date=r[7],
            project_ids=[p[0] for p in project_rows],
        )

    async def update(self, secret: Secret) -> None:
        """Update secret fields and replace its project links."""
        await self._conn.execute(
            "UPDATE secret SET key=%s, value=%s, note=%s, revision_date=%s WHERE id=%s",
            (secret.key, secret.value, secret.note, secret.revision_date, secret.id),
        )
        await self._conn.execute(
            "DELETE FROM project_secret WHERE secret_id = %s",
            (secret.id,),
        )
        for project_id in secret.project_ids:
            await self._conn.execute(
                "INSERT INTO project_secret (project_id, secret_id) VALUES (%s, %s)",
                (project_id, secret.id),
            )
