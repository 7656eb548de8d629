# src/cache/cache_factory.py — v1
"""Factory for cache store instantiation."""

from __future__ import annotations

from doccache.cache.base_cache_store import BaseCacheStore
from doccache.config.settings import ConfigurationError, Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore | None:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to the in-memory backend.

    Returns:
        Configured BaseCacheStore, or None when caching is disabled.
    """
    backend = "memory" if settings is None else settings.cache_backend

    if backend == "none":
        return None

    if backend == "memory":
        from doccache.cache.memory_store import InMemoryCacheStore
        max_entries = 10_000 if settings is None else settings.cache_max_entries
        return InMemoryCacheStore(max_entries=max_entries)

    if backend == "redis":
        from doccache.cache.redis_store import RedisCacheStore
        if settings is None or not settings.cache_redis_url:
            raise ConfigurationError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisCacheStore(redis_url=settings.cache_redis_url)

    raise ConfigurationError(f"Unsupported cache backend: {backend!r}")
