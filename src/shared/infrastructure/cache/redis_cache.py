"""
Redis Cache Implementation
Async Redis-backed remote store
"""
from __future__ import annotations

import json
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.shared.logging import get_logger

logger = get_logger(__name__)


class RedisStore:
    """
    Async Redis remote store.

    CRITICAL: Redis is ONLY for optimization - never source of truth.
    Errors are logged as warnings and reported as misses / failed writes.

    Attributes:
        redis: Async Redis client
        key_prefix: Prefix for all cache keys (for namespacing)
    """

    name = "redis"

    def __init__(self, redis: Redis, key_prefix: str = "bigbased") -> None:
        self.redis = redis
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "bigbased") -> "RedisStore":
        # from_url is sync; no connection is made until the first command
        return cls(Redis.from_url(url, decode_responses=True), key_prefix=key_prefix)

    def _make_key(self, key: str) -> str:
        """Create prefixed key for namespacing."""
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    async def get(self, key: str) -> Any | None:
        try:
            value = await self.redis.get(self._make_key(key))
            if value is None:
                return None
            return json.loads(value)
        except RedisError as e:
            logger.warning("Redis GET failed", key=key, error=str(e))
            return None
        except json.JSONDecodeError as e:
            logger.warning("Failed to deserialize cached value", key=key, error=str(e))
            return None

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        try:
            serialized = json.dumps(value)
            await self.redis.set(self._make_key(key), serialized, ex=ttl)
            logger.debug("Cached value", key=key, ttl=ttl)
            return True
        except (RedisError, TypeError, ValueError) as e:
            logger.warning("Redis SET failed", key=key, error=str(e))
            return False

    async def delete(self, key: str) -> bool:
        try:
            await self.redis.delete(self._make_key(key))
            return True
        except RedisError as e:
            logger.warning("Redis DELETE failed", key=key, error=str(e))
            return False

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        await self.redis.aclose()
