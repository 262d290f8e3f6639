"""Group entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Group:
    """Group of organization users."""

    id: UUID
    organization_id: UUID
    name: str
