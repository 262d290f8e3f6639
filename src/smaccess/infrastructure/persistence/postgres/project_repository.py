"""PostgreSQL project repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from smaccess.domain.entities import Project

_COLUMNS = "id, organization_id, name, creation_date, revision_date, deleted_date"


def _row_to_project(r: tuple) -> Project:
    return Project(
        id=r[0],
        organization_id=r[1],
        name=r[2],
        creation_date=r[3],
        revision_date=r[4],
        deleted_date=r[5],
    )


class PostgresProjectRepository:
    """Project repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, project_id: UUID) -> Project | None:
        """Get project by id, excluding deleted."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM project WHERE id = %s AND deleted_date IS NULL",
            (project_id,),
        )
        r = await cur.fetchone()
        return _row_to_project(r) if r else None

    async def update(self, project: Project) -> None:
        """Update project."""
        await self._conn.execute(
            "UPDATE project SET name=%s, revision_date=%s WHERE id=%s",
            (project.name, project.revision_date, project.id),
        )

    async def projects_are_in_organization(
        self, project_ids: list[UUID], organization_id: UUID
    ) -> bool:
        """True if every id is a live project of the organization."""
        distinct_ids = list(set(project_ids))
        cur = await self._conn.execute(
            "SELECT COUNT(*) FROM project "
            "WHERE id = ANY(%s) AND organization_id = %s AND deleted_date IS NULL",
            (distinct_ids, organization_id),
        )
        r = await cur.fetchone()
        return r[0] == len(distinct_ids)
