from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from src.tenancy.domain.entities.domain_config import DomainConfig


class DomainRepository(ABC):
    """
    Read side of the `domains` / `domain_settings` tables.
    Writes belong to the admin flow and are not exposed here.
    """

    @abstractmethod
    async def get_active_by_domain(self, domain: str) -> Optional[DomainConfig]:
        """Return the active tenant whose domain equals `domain`, with settings flattened, or None."""
