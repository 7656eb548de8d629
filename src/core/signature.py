# src/core/signature.py — v2
"""Canonical signatures for lookup requests.

A signature is a deterministic string built from the logical content of a
lookup: field names sorted, values normalized, deduplicated and sorted.
It keys both the in-flight memo of the batch coordinator and the external
cache, so ``{"tags": "foo"}`` and ``{"tags": ["foo", "foo"]}`` must agree.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from doccache.core.ids import id_to_string
from doccache.core.models import FieldLookup, Signature

ID_ALIAS = "id"


def value_key(value: Any) -> str:
    """Normalized string form of one accepted or stored value.

    ObjectIds encode as their hex string, so an ObjectId and its string
    form compare equal. Numbers compare by value (``1`` is ``1.0``) while
    other scalars keep their JSON type (``1`` is not ``"1"``), which is how
    the store itself compares them.
    """
    return json.dumps(
        _normalize_numbers(value),
        default=id_to_string,
        sort_keys=True,
        separators=(",", ":"),
    )


def _normalize_numbers(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_numbers(v) for v in value]
    if isinstance(value, dict):
        return {k: _normalize_numbers(v) for k, v in value.items()}
    return value


def as_values(raw: Any) -> list[Any]:
    """Accepted values for one field: sequences are spread, scalars wrapped."""
    if isinstance(raw, (list, tuple, set, frozenset)):
        return list(raw)
    return [raw]


def id_signature(identifier: Any) -> Signature:
    """Signature of a point lookup: the normalized identifier alone.

    Uses the same equality as batching and matching: an ObjectId and its
    hex string share a signature, ``1`` and ``"1"`` do not.
    """
    return Signature(value_key(identifier))


def build_field_lookup(
    fields: Mapping[str, Any], id_field: str = "_id"
) -> FieldLookup:
    """Normalize a caller-supplied field mapping into a FieldLookup.

    The ``id`` field name is an alias for *id_field*.
    """
    collected: dict[str, dict[str, Any]] = {}
    for name, raw in fields.items():
        doc_field = id_field if name == ID_ALIAS else name
        bucket = collected.setdefault(doc_field, {})
        for value in as_values(raw):
            bucket.setdefault(value_key(value), value)

    normalized = tuple(
        (name, tuple(collected[name][key] for key in sorted(collected[name])))
        for name in sorted(collected)
    )
    return FieldLookup(fields=normalized, signature=_render(normalized))


def build_id_lookup(identifier: Any, id_field: str = "_id") -> FieldLookup:
    """FieldLookup equivalent of a point lookup on *identifier*."""
    return build_field_lookup({id_field: identifier}, id_field=id_field)


def fields_signature(fields: Mapping[str, Any], id_field: str = "_id") -> Signature:
    return build_field_lookup(fields, id_field=id_field).signature


def _render(normalized: tuple[tuple[str, tuple[Any, ...]], ...]) -> Signature:
    parts = []
    for name, values in normalized:
        encoded = ",".join(sorted(value_key(v) for v in values))
        parts.append(f"{json.dumps(name)}:[{encoded}]")
    return Signature("{" + ",".join(parts) + "}")
