"""Project DTOs."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class ProjectUpdateInput:
    """Input for updating a project."""

    id: UUID
    name: str
