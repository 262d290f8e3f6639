"""Service account repository port."""

from typing import Protocol
from uuid import UUID

from smaccess.domain.entities import ServiceAccount


class ServiceAccountRepository(Protocol):
    """Port for service account persistence."""

    async def get_by_id(self, service_account_id: UUID) -> ServiceAccount | None: ...
