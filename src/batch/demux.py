# src/batch/demux.py — v1
"""Route the documents of a combined query back to each original lookup."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from doccache.core.models import FieldLookup
from doccache.core.paths import MISSING, get_nested_value
from doccache.core.signature import as_values, value_key


def held_keys(document: Any, path: str) -> set[str]:
    """Normalized values stored at *path*; arrays contribute their elements."""
    held = get_nested_value(document, path)
    if held is MISSING:
        return set()
    return {value_key(v) for v in as_values(held)}


def matches(lookup: FieldLookup, document: Any) -> bool:
    """AND across fields, OR across the accepted values of one field."""
    for name, values in lookup.fields:
        stored = held_keys(document, name)
        if not stored:
            return False
        if not any(value_key(v) in stored for v in values):
            return False
    return True


def demux(
    lookups: Sequence[FieldLookup], documents: Sequence[dict[str, Any]]
) -> list[list[dict[str, Any]]]:
    """One result list per lookup, in lookup order.

    Documents keep the order the store returned them in. A lookup that
    matches nothing gets an empty list.
    """
    return [[doc for doc in documents if matches(lookup, doc)] for lookup in lookups]
