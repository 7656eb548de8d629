# src/core/ids.py — v2
"""Identifier normalization between ``bson.ObjectId`` and plain strings.

Both directions are total: malformed identifiers are never rejected, they
are simply kept as opaque strings so lookups degrade to string equality.
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId


def id_to_string(value: Any) -> str:
    """Return the canonical hex form of an ObjectId, else ``str(value)``."""
    return str(value)


def is_valid_object_id_string(value: Any) -> bool:
    """True when *value* is a string that parses as an ObjectId and round-trips.

    ``ObjectId.is_valid`` alone is too loose: upper-case hex parses fine but
    stringifies back to lower-case, so the reconstructed id would not equal
    the string the caller asked for.
    """
    if not isinstance(value, str):
        return False
    return ObjectId.is_valid(value) and str(ObjectId(value)) == value


def string_to_id(value: Any) -> Any:
    """Best-effort reconstruction of an ObjectId from its string form."""
    if isinstance(value, ObjectId):
        return value
    if is_valid_object_id_string(value):
        return ObjectId(value)
    return value
