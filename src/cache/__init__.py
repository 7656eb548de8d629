from doccache.cache.base_cache_store import BaseCacheStore
from doccache.cache.layer import CacheLayer
from doccache.cache.memory_store import InMemoryCacheStore

__all__ = ["BaseCacheStore", "CacheLayer", "InMemoryCacheStore"]
