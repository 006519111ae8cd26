"""
Shared Cache Infrastructure
In-process TTL tier plus optional remote tier (REST KV or Redis)
"""
from src.shared.infrastructure.cache.cache_protocol import IRemoteStore
from src.shared.infrastructure.cache.memory_cache import CacheEntry, MemoryTTLCache
from src.shared.infrastructure.cache.redis_cache import RedisStore
from src.shared.infrastructure.cache.rest_kv_store import RestKVStore
from src.shared.infrastructure.cache.sweeper import CacheSweepWorker
from src.shared.infrastructure.cache.tiered_cache import TieredCache

__all__ = [
    "IRemoteStore",
    "CacheEntry",
    "MemoryTTLCache",
    "RedisStore",
    "RestKVStore",
    "CacheSweepWorker",
    "TieredCache",
]
