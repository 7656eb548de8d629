# src/core/models.py — v1
"""Core domain models: Signature, FieldLookup, LoaderStats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NewType

from pydantic import BaseModel

Signature = NewType("Signature", str)
"""Opaque, comparable key for the logical content of a lookup."""


@dataclass(frozen=True)
class FieldLookup:
    """Normalized lookup: sorted field paths, each with deduplicated accepted values.

    Point lookups are represented as a FieldLookup on the id field.
    """

    fields: tuple[tuple[str, tuple[Any, ...]], ...]
    signature: Signature

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    @property
    def field_set_key(self) -> str:
        """Sorted, comma-joined field names used to group compatible lookups."""
        return ",".join(self.field_names)

    def as_dict(self) -> dict[str, list[Any]]:
        return {name: list(values) for name, values in self.fields}


class LoaderStats(BaseModel):
    """Counters for one collection's lookup engine."""

    windows_dispatched: int = 0
    store_queries: int = 0
    store_failures: int = 0
    requests_enqueued: int = 0
    requests_joined: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    cache_writes: int = 0
    cache_deletes: int = 0
