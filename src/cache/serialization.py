# src/cache/serialization.py — v1
"""Round-trip-safe serialization of cached documents.

Plain JSON would turn an ObjectId into an indistinguishable string, so
values are written as MongoDB Extended JSON (relaxed mode) via
``bson.json_util``: ``{"_id": {"$oid": "..."}}`` decodes back to an
ObjectId, datetimes back to datetimes.
"""

from __future__ import annotations

from typing import Any

from bson import json_util

_JSON_OPTIONS = json_util.RELAXED_JSON_OPTIONS


def dumps(value: Any) -> str:
    """Serialize a document, a list of documents, or None."""
    return json_util.dumps(value, json_options=_JSON_OPTIONS)


def loads(payload: str) -> Any:
    """Inverse of :func:`dumps`."""
    return json_util.loads(payload, json_options=_JSON_OPTIONS)
