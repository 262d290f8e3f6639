"""Secret entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class Secret:
    """Secret - key/value/note are encrypted client-side and stored as-is."""

    id: UUID
    organization_id: UUID
    key: str
    value: str
    note: str
    creation_date: datetime
    revision_date: datetime
    project_ids: list[UUID] = field(default_factory=list)
    deleted_date: datetime | None = None
