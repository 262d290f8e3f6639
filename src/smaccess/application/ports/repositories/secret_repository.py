"""Secret repository port."""

from typing import Protocol
from uuid import UUID

from smaccess.domain.entities import Secret


class SecretRepository(Protocol):
    """Port for secret persistence. Soft-deleted secrets are never returned."""

    async def get_by_id(self, secret_id: UUID) -> Secret | None: ...

    async def update(self, secret: Secret) -> None: ...
