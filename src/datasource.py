# src/datasource.py — v2
"""Caching lookup methods for one document collection.

``create_caching_methods`` wraps a store handle (async driver collection or
ODM model class) and returns a :class:`CachingMethods` exposing:

* ``find_one_by_id`` / ``find_many_by_ids``: point lookups by identifier.
* ``find_by_fields``: equality / membership lookups over (nested) fields.
* ``delete_from_cache_by_id`` / ``delete_from_cache_by_fields``: exact-match
  invalidation of both the external cache and the in-flight memo.

Each call checks the cache, then goes through the batch coordinator, so
lookups issued in the same event-loop tick share one store query. A caller
that is cancelled stops waiting without cancelling the shared lookup that
other callers joined.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from doccache.batch.coordinator import BatchCoordinator
from doccache.cache.base_cache_store import BaseCacheStore
from doccache.cache.cache_factory import create_cache_store
from doccache.cache.layer import CacheLayer
from doccache.config.settings import Settings
from doccache.core.models import LoaderStats
from doccache.core.signature import (
    build_field_lookup,
    build_id_lookup,
    id_signature,
)
from doccache.logging.context import log_context
from doccache.logging.logger import null_logger
from doccache.store.sources import QuerySource, as_query_source


class CachingMethods:
    """Cache-fronted, request-coalescing lookups against one collection."""

    def __init__(
        self,
        source: QuerySource,
        cache: BaseCacheStore | None = None,
        *,
        id_field: str = "_id",
        batch_delay: float = 0.0,
        memoize: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self._source = source
        self._id_field = id_field
        self._logger = logger or null_logger()
        self.stats = LoaderStats()
        self._coordinator = BatchCoordinator(
            source,
            logger=self._logger,
            batch_delay=batch_delay,
            memoize=memoize,
            stats=self.stats,
        )
        self._cache = CacheLayer(
            cache, source.name, logger=self._logger, stats=self.stats
        )

    @property
    def collection_name(self) -> str:
        return self._source.name

    @property
    def id_field(self) -> str:
        return self._id_field

    @property
    def cache(self) -> CacheLayer:
        return self._cache

    @property
    def coordinator(self) -> BatchCoordinator:
        return self._coordinator

    async def find_one_by_id(
        self, id: Any, *, ttl: int | None = None
    ) -> dict[str, Any] | None:
        """Return the document whose id field equals *id*, or None."""
        signature = id_signature(id)
        with log_context(collection=self.collection_name, operation="find_one_by_id"):
            hit, cached = await self._cache.get(signature)
            if hit:
                return cached

            docs = await asyncio.shield(
                self._coordinator.load(build_id_lookup(id, self._id_field))
            )
            doc = docs[0] if docs else None
            await self._cache.set(signature, doc, ttl)
            return doc

    async def find_many_by_ids(
        self, ids: Iterable[Any], *, ttl: int | None = None
    ) -> list[dict[str, Any] | None]:
        """One entry per input id, in input order; None where not found."""
        return list(
            await asyncio.gather(*(self.find_one_by_id(i, ttl=ttl) for i in ids))
        )

    async def find_by_fields(
        self, fields: Mapping[str, Any], *, ttl: int | None = None
    ) -> list[dict[str, Any]]:
        """Documents matching every field; a list value means any-of.

        Field names may be dotted paths into nested documents. ``id`` is an
        alias of the id field.
        """
        lookup = build_field_lookup(fields, self._id_field)
        with log_context(collection=self.collection_name, operation="find_by_fields"):
            hit, cached = await self._cache.get(lookup.signature)
            if hit:
                return cached

            docs = list(await asyncio.shield(self._coordinator.load(lookup)))
            await self._cache.set(lookup.signature, docs, ttl)
            return docs

    async def delete_from_cache_by_id(self, id: Any) -> None:
        self._coordinator.clear(build_id_lookup(id, self._id_field).signature)
        with log_context(collection=self.collection_name, operation="delete_from_cache_by_id"):
            await self._cache.delete(id_signature(id))

    async def delete_from_cache_by_fields(self, fields: Mapping[str, Any]) -> None:
        """Invalidate the entry written for exactly this field mapping."""
        lookup = build_field_lookup(fields, self._id_field)
        self._coordinator.clear(lookup.signature)
        with log_context(collection=self.collection_name, operation="delete_from_cache_by_fields"):
            await self._cache.delete(lookup.signature)

    def clear_memo(self) -> None:
        """Drop every memoized lookup (external cache untouched)."""
        self._coordinator.clear_all()


def create_caching_methods(
    handle: Any,
    cache: BaseCacheStore | None = None,
    *,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
) -> CachingMethods:
    """Build CachingMethods for a collection or ODM model.

    Args:
        handle: Async driver collection, ODM model class, or a QuerySource.
        cache: Cache store. Defaults to the backend named in *settings*
            (in-memory when no settings are given).
        settings: Batching / cache / id-field configuration.
        logger: Injected logger; silent when omitted.

    Raises:
        ConfigurationError: If *handle* cannot be used as a query source.
    """
    source = as_query_source(handle)
    if cache is None:
        cache = create_cache_store(settings)
    if settings is None:
        return CachingMethods(source, cache, logger=logger)
    return CachingMethods(
        source,
        cache,
        id_field=settings.id_field,
        batch_delay=settings.batch_delay_seconds,
        memoize=settings.loader_memoize,
        logger=logger,
    )
