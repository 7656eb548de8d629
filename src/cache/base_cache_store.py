# src/cache/base_cache_store.py — v1
"""Abstract key-value cache store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends.

    Values are opaque strings; expiry is expressed in whole seconds.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """Store *value* under *key*, expiring after *ttl* seconds if given."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*; deleting an absent key is not an error."""
