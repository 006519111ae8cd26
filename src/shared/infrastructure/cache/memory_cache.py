"""
In-process TTL cache
Always-on local tier; one instance per process, no cross-instance consistency
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

Clock = Callable[[], float]


@dataclass(slots=True)
class CacheEntry:
    """A cached value with the clock reading at write time and its TTL (seconds)."""
    data: Any
    timestamp: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.timestamp > self.ttl


class MemoryTTLCache:
    """
    Key → CacheEntry map with an injected clock.

    Expired entries read as misses but stay in the map until `sweep()` runs,
    so memory is bounded by the sweep interval rather than by reads.
    """

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None or entry.is_expired(self._clock()):
            return None
        return entry.data

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        self._entries[key] = CacheEntry(data=value, timestamp=self._clock(), ttl=ttl_seconds)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def sweep(self) -> int:
        """Remove expired entries; returns how many were dropped."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.is_expired(now)]
        for k in expired:
            del self._entries[k]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        # Raw presence, expired or not
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
