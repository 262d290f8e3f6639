"""Service account entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class ServiceAccount:
    """Service account - machine principal owned by an organization."""

    id: UUID
    organization_id: UUID
    name: str
    creation_date: datetime
    revision_date: datetime
