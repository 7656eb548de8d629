# src/batch/coordinator.py — v2
"""Batch coordinator: coalesce lookups issued in one event-loop tick.

Lookups enqueued before control returns to the event loop land in the same
window. The first enqueue of a window schedules its dispatch with
``loop.call_soon`` (or ``call_later`` when a batch delay is configured);
by the time the callback runs every synchronously issued lookup has been
collected. One dispatch merges the window, runs exactly one store query,
demultiplexes the documents and resolves one future per signature.

Identical signatures share a future while it is pending. With
``memoize=True`` resolved futures are kept until ``clear`` so repeated
lookups in the same request context never hit the store twice.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any

from doccache.batch.demux import demux
from doccache.batch.merger import merge_filters
from doccache.core.models import FieldLookup, LoaderStats, Signature
from doccache.logging.logger import null_logger
from doccache.store.sources import QuerySource

Documents = list[dict[str, Any]]


class BatchCoordinator:
    """Per-collection owner of the pending-signature map and window lifecycle."""

    def __init__(
        self,
        source: QuerySource,
        *,
        logger: logging.Logger | None = None,
        batch_delay: float = 0.0,
        memoize: bool = False,
        stats: LoaderStats | None = None,
    ) -> None:
        if batch_delay < 0:
            raise ValueError("batch_delay must be >= 0")
        self._source = source
        self._logger = logger or null_logger()
        self._batch_delay = batch_delay
        self._memoize = memoize
        self.stats = stats if stats is not None else LoaderStats()

        self._memo: dict[Signature, asyncio.Future[Documents]] = {}
        self._window: list[tuple[FieldLookup, asyncio.Future[Documents]]] = []
        self._dispatch_scheduled = False
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def source(self) -> QuerySource:
        return self._source

    @property
    def pending_count(self) -> int:
        """Lookups waiting for the next dispatch."""
        return len(self._window)

    def load(self, lookup: FieldLookup) -> asyncio.Future[Documents]:
        """Join an identical pending lookup or add *lookup* to the window.

        Must be called from a running event loop. The returned future
        resolves to the documents matching *lookup* (possibly empty). A
        cancelled future is dropped from the memo and never joined.
        """
        existing = self._memo.get(lookup.signature)
        if existing is not None and not existing.cancelled():
            self.stats.requests_joined += 1
            return existing

        loop = asyncio.get_running_loop()
        future: asyncio.Future[Documents] = loop.create_future()
        future.add_done_callback(partial(self._release_cancelled, lookup.signature))
        self._memo[lookup.signature] = future
        self._window.append((lookup, future))
        self.stats.requests_enqueued += 1

        if not self._dispatch_scheduled:
            self._dispatch_scheduled = True
            if self._batch_delay > 0:
                loop.call_later(self._batch_delay, self._dispatch)
            else:
                loop.call_soon(self._dispatch)
        return future

    def clear(self, signature: Signature) -> None:
        """Forget *signature* so the next identical lookup queries the store.

        Waiters already holding the old future still receive its result.
        """
        self._memo.pop(signature, None)

    def clear_all(self) -> None:
        self._memo.clear()

    def _dispatch(self) -> None:
        self._dispatch_scheduled = False
        window, self._window = self._window, []
        if not window:
            return
        task = asyncio.get_running_loop().create_task(self._resolve(window))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _resolve(
        self, window: list[tuple[FieldLookup, asyncio.Future[Documents]]]
    ) -> None:
        lookups = [lookup for lookup, _ in window]
        self.stats.windows_dispatched += 1
        try:
            query = merge_filters(lookups)
            self._logger.debug(
                "Dispatching batch window",
                extra={"data": {
                    "collection": self._source.name,
                    "lookups": len(lookups),
                    "filter": repr(query),
                }},
            )
            self.stats.store_queries += 1
            documents = await self._source.find(query)
            results = demux(lookups, documents)
        except Exception as e:
            self.stats.store_failures += 1
            self._logger.error(
                "Store query failed for %d coalesced lookups on %s: %s",
                len(lookups), self._source.name, e,
            )
            for lookup, future in window:
                self._forget(lookup.signature, future)
                if not future.done():
                    future.set_exception(e)
            return

        for (lookup, future), docs in zip(window, results):
            if not self._memoize:
                self._forget(lookup.signature, future)
            if not future.done():
                future.set_result(docs)

        self._logger.debug(
            "Batch window resolved",
            extra={"data": {
                "collection": self._source.name,
                "documents": len(documents),
                "lookups": len(lookups),
            }},
        )

    def _release_cancelled(
        self, signature: Signature, future: asyncio.Future[Documents]
    ) -> None:
        if future.cancelled():
            self._forget(signature, future)

    def _forget(self, signature: Signature, future: asyncio.Future[Documents]) -> None:
        # clear() may already have replaced the entry with a newer future.
        if self._memo.get(signature) is future:
            del self._memo[signature]
