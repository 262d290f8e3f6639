"""Project entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Project:
    """Project - groups secrets inside an organization."""

    id: UUID
    organization_id: UUID
    name: str
    creation_date: datetime
    revision_date: datetime
    deleted_date: datetime | None = None
