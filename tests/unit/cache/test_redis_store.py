# tests/unit/cache/test_redis_store.py — v1
"""Tests for cache/redis_store.py — mocked asyncio Redis client."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest


def _make_store(client, key_prefix: str = ""):
    with patch("doccache.cache.redis_store.RedisCacheStore.__init__", return_value=None):
        from doccache.cache.redis_store import RedisCacheStore
        store = RedisCacheStore.__new__(RedisCacheStore)
        store._client = client
        store._key_prefix = key_prefix
    return store


def _fake_client():
    storage: dict[str, str] = {}
    client = MagicMock()
    client.get = AsyncMock(side_effect=lambda k: storage.get(k))
    client.set = AsyncMock(side_effect=lambda k, v, ex=None: storage.__setitem__(k, v))
    client.delete = AsyncMock(side_effect=lambda k: storage.pop(k, None))
    client.aclose = AsyncMock()
    return client, storage


class TestRedisCacheStore:
    def test_import_error_without_redis(self):
        """Clear ImportError when redis is not available."""
        import sys
        saved = {name: sys.modules.get(name) for name in ("redis", "redis.asyncio")}
        sys.modules["redis"] = None  # type: ignore[assignment]
        sys.modules["redis.asyncio"] = None  # type: ignore[assignment]
        try:
            from doccache.cache.redis_store import RedisCacheStore
            with pytest.raises(ImportError, match="redis"):
                RedisCacheStore(redis_url="redis://localhost")
        finally:
            for name, module in saved.items():
                if module is not None:
                    sys.modules[name] = module
                else:
                    sys.modules.pop(name, None)

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        client, _ = _fake_client()
        store = _make_store(client)
        await store.set("key1", "payload")
        assert await store.get("key1") == "payload"

    @pytest.mark.asyncio
    async def test_ttl_passed_as_expiry(self):
        client, _ = _fake_client()
        store = _make_store(client)
        await store.set("key1", "payload", ttl=30)
        client.set.assert_awaited_once_with("key1", "payload", ex=30)

    @pytest.mark.asyncio
    async def test_no_ttl(self):
        client, _ = _fake_client()
        store = _make_store(client)
        await store.set("key1", "payload")
        client.set.assert_awaited_once_with("key1", "payload", ex=None)

    @pytest.mark.asyncio
    async def test_delete(self):
        client, _ = _fake_client()
        store = _make_store(client)
        await store.set("key1", "payload")
        await store.delete("key1")
        assert await store.get("key1") is None

    @pytest.mark.asyncio
    async def test_key_prefix(self):
        client, storage = _fake_client()
        store = _make_store(client, key_prefix="doccache:")
        await store.set("test-abc", "payload")
        assert "doccache:test-abc" in storage

    @pytest.mark.asyncio
    async def test_close(self):
        client, _ = _fake_client()
        store = _make_store(client)
        await store.close()
        client.aclose.assert_awaited_once()
