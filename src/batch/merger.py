# src/batch/merger.py — v1
"""Merge a window of pending lookups into one store filter.

Lookups are grouped by their field-name set. Inside a group every field
becomes one ``$in`` clause holding the union of the group's values; groups
with different field sets are OR-ed, never flattened, so a lookup on
``{foo}`` is not broadened by a concurrent lookup on ``{foo, tags}``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from doccache.core.ids import string_to_id
from doccache.core.models import FieldLookup
from doccache.core.signature import value_key


def group_lookups(
    lookups: Sequence[FieldLookup],
) -> dict[str, dict[str, dict[str, Any]]]:
    """Group lookups by field-name set.

    Returns ``{field_set_key: {field: {value_key: native_value}}}`` with
    first-seen ordering preserved at every level.
    """
    groups: dict[str, dict[str, dict[str, Any]]] = {}
    for lookup in lookups:
        group = groups.setdefault(
            lookup.field_set_key, {name: {} for name in lookup.field_names}
        )
        for name, values in lookup.fields:
            clause = group[name]
            for value in values:
                native = string_to_id(value)
                clause.setdefault(value_key(native), native)
    return groups


def merge_filters(lookups: Sequence[FieldLookup]) -> dict[str, Any]:
    """Build the single combined filter for a batch window.

    Raises:
        ValueError: If *lookups* is empty.
    """
    if not lookups:
        raise ValueError("Cannot merge an empty batch window")

    clauses = [
        {name: {"$in": list(values.values())} for name, values in group.items()}
        for group in group_lookups(lookups).values()
    ]
    if len(clauses) == 1:
        return clauses[0]
    return {"$or": clauses}
