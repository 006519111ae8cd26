"""
Cache Protocol (Abstract Interface)
Contract for remote cache stores backing the in-process tier
"""
from __future__ import annotations

from typing import Any, Protocol


class IRemoteStore(Protocol):
    """
    Abstract remote key-value store.

    Implementations (REST key-value service, Redis) must conform to this protocol.
    Cache is used ONLY for optimization - never as source of truth, so every
    method reports failure through its return value instead of raising.
    """

    name: str

    async def get(self, key: str) -> Any | None:
        """
        Retrieve value from the store by key.

        Args:
            key: Cache key

        Returns:
            Deserialized value, or None if missing, expired or unreadable
        """
        ...

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """
        Store a JSON-serializable value with a TTL.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live in seconds

        Returns:
            True if the store acknowledged the write, False otherwise
        """
        ...

    async def delete(self, key: str) -> bool:
        """
        Delete a key from the store.

        Returns:
            True if the store acknowledged the delete, False otherwise
        """
        ...

    async def ping(self) -> bool:
        """
        Check connectivity.

        Returns:
            True if the store is reachable, False otherwise
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
