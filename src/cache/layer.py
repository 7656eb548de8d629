# src/cache/layer.py — v1
"""Read-through / write-through cache in front of the batch coordinator.

Keys are ``"<collection-name>-" + signature``. Reads never populate the
cache; a write only happens when the caller supplies a positive integer
ttl. Invalidation is exact-match only: deleting needs the same signature
that was used at write time.
"""

from __future__ import annotations

import logging
from typing import Any

from bson.errors import BSONError

from doccache.cache import serialization
from doccache.cache.base_cache_store import BaseCacheStore
from doccache.core.models import LoaderStats, Signature
from doccache.logging.logger import null_logger


def cacheable_ttl(ttl: Any) -> bool:
    """Only positive integers (not bools) enable a cache write."""
    return isinstance(ttl, int) and not isinstance(ttl, bool) and ttl > 0


class CacheLayer:
    """Collection-scoped view over a key-value cache store."""

    def __init__(
        self,
        store: BaseCacheStore | None,
        collection_name: str,
        *,
        logger: logging.Logger | None = None,
        stats: LoaderStats | None = None,
    ) -> None:
        self._store = store
        self._prefix = f"{collection_name}-"
        self._logger = logger or null_logger()
        self.stats = stats if stats is not None else LoaderStats()

    @property
    def enabled(self) -> bool:
        return self._store is not None

    def key_for(self, signature: Signature) -> str:
        return self._prefix + signature

    async def get(self, signature: Signature) -> tuple[bool, Any]:
        """Return ``(hit, value)``.

        A cached ``None`` (a point lookup that found nothing) is a hit. An
        entry that no longer decodes is logged and reported as a miss.
        """
        if self._store is None:
            return False, None

        key = self.key_for(signature)
        payload = await self._store.get(key)
        if payload is None:
            self.stats.cache_misses += 1
            self._logger.debug("Cache miss", extra={"data": {"key": key}})
            return False, None

        try:
            value = serialization.loads(payload)
        except (ValueError, BSONError) as e:
            self.stats.cache_misses += 1
            self._logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return False, None

        self.stats.cache_hits += 1
        self._logger.debug("Cache hit", extra={"data": {"key": key}})
        return True, value

    async def set(self, signature: Signature, value: Any, ttl: Any = None) -> bool:
        """Write *value* when caching is enabled and *ttl* allows it."""
        if self._store is None or not cacheable_ttl(ttl):
            return False
        key = self.key_for(signature)
        await self._store.set(key, serialization.dumps(value), ttl=ttl)
        self.stats.cache_writes += 1
        self._logger.debug("Cache write", extra={"data": {"key": key, "ttl": ttl}})
        return True

    async def delete(self, signature: Signature) -> None:
        if self._store is None:
            return
        key = self.key_for(signature)
        await self._store.delete(key)
        self.stats.cache_deletes += 1
        self._logger.debug("Cache delete", extra={"data": {"key": key}})
