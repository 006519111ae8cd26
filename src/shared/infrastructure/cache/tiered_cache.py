"""
Two-tier cache
Optional remote store in front of an always-on in-process TTL map
"""
from __future__ import annotations

from typing import Any, Optional

from src.shared.infrastructure.cache.cache_protocol import IRemoteStore
from src.shared.infrastructure.cache.memory_cache import MemoryTTLCache
from src.shared.logging import get_logger

logger = get_logger(__name__)


class TieredCache:
    """
    get:    remote (when configured) → memory
    set:    remote (best effort) and ALWAYS memory
    delete: both tiers

    A missing remote store means the remote path is never attempted.
    Remote failures never reach the caller.
    """

    def __init__(self, memory: MemoryTTLCache, remote: Optional[IRemoteStore] = None) -> None:
        self.memory = memory
        self.remote = remote

    @property
    def remote_name(self) -> Optional[str]:
        return self.remote.name if self.remote is not None else None

    async def get(self, key: str) -> Optional[Any]:
        if self.remote is not None:
            try:
                value = await self.remote.get(key)
            except Exception as e:
                logger.warning("Remote cache lookup failed, using memory tier", key=key, error=str(e))
                value = None
            if value is not None:
                return value
        return self.memory.get(key)

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        if self.remote is not None:
            try:
                await self.remote.set(key, value, ttl_seconds)
            except Exception as e:
                logger.warning("Remote cache write failed", key=key, error=str(e))
        self.memory.set(key, value, ttl_seconds)

    async def delete(self, key: str) -> None:
        if self.remote is not None:
            try:
                await self.remote.delete(key)
            except Exception as e:
                logger.warning("Remote cache delete failed", key=key, error=str(e))
        self.memory.delete(key)

    def sweep(self) -> int:
        return self.memory.sweep()

    async def close(self) -> None:
        if self.remote is not None:
            await self.remote.close()
