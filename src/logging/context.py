# src/logging/context.py — v1
"""Contextual logging support: attach collection and operation to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

_collection: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "collection", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Immutable snapshot of current logging context."""

    collection: str | None = None
    operation: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(collection=_collection.get(), operation=_operation.get())


@contextmanager
def log_context(
    collection: str | None = None, operation: str | None = None
) -> Iterator[LogContext]:
    """Bind collection / operation for the duration of the block.

    Each asyncio task runs in a copy of the context, so concurrent lookups
    on different collections never see each other's values.
    """
    tokens = []
    if collection is not None:
        tokens.append((_collection, _collection.set(collection)))
    if operation is not None:
        tokens.append((_operation, _operation.set(operation)))
    try:
        yield get_context()
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def clear_context() -> None:
    """Reset all context variables."""
    _collection.set(None)
    _operation.set(None)
