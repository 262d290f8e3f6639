"""PostgreSQL service account repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from smaccess.domain.entities import ServiceAccount


class PostgresServiceAccountRepository:
    """Service account repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, service_account_id: UUID) -> ServiceAccount | None:
        """Get service account by id."""
        cur = await self._conn.execute(
            "SELECT id, organization_id, name, creation_date, revision_date "
            "FROM service_account WHERE id = %s",
            (service_account_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return ServiceAccount(
            id=r[0],
            organization_id=r[1],
            name=r[2],
            creation_date=r[3],
            revision_date=r[4],
        )
