# src/cache/redis_store.py — v1
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for distributed/multi-instance deployments; expiry is delegated
to Redis itself (``SET key value EX ttl``).
"""

from __future__ import annotations

import logging

from doccache.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store using the asyncio client."""

    def __init__(self, redis_url: str, key_prefix: str = "") -> None:
        try:
            from redis import asyncio as aioredis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = aioredis.Redis.from_url(redis_url, decode_responses=True)
        self._key_prefix = key_prefix

    async def get(self, key: str) -> str | None:
        return await self._client.get(f"{self._key_prefix}{key}")

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        await self._client.set(f"{self._key_prefix}{key}", value, ex=ttl or None)

    async def delete(self, key: str) -> None:
        await self._client.delete(f"{self._key_prefix}{key}")

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()
        logger.debug("Redis cache store closed")
