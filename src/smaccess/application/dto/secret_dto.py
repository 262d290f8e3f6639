"""Secret DTOs."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass
class SecretUpdateInput:
    """Input for updating a secret. Encrypted fields are opaque strings."""

    id: UUID
    key: str
    value: str
    note: str
    project_ids: list[UUID] = field(default_factory=list)
