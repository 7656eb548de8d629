# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides an in-memory async collection that evaluates ``$in`` / ``$or``
filters the way MongoDB does, plus a small document set. No external
services are needed.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from bson import ObjectId

HEX_ID = "5cf82e14a220a607eb64a7d4"


# === FAKE STORE ===


def _values_at(doc: Any, path: str) -> list[Any]:
    """Values stored at a dotted path; arrays contribute their elements."""
    current: list[Any] = [doc]
    for segment in path.split("."):
        found: list[Any] = []
        for item in current:
            if isinstance(item, dict) and segment in item:
                value = item[segment]
                if isinstance(value, list):
                    found.extend(value)
                else:
                    found.append(value)
            elif isinstance(item, list) and segment.isdigit() and int(segment) < len(item):
                found.append(item[int(segment)])
        current = found
    return current


def filter_matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for clause in query.get("$or", [query]):
        if all(
            any(v in spec["$in"] for v in _values_at(doc, field))
            for field, spec in clause.items()
        ):
            return True
    return False


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]], error: Exception | None = None):
        self._docs = docs
        self._error = error

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        await asyncio.sleep(0)
        if self._error is not None:
            raise self._error
        return list(self._docs)


class FakeCollection:
    """Async driver-style collection backed by a list of dicts."""

    def __init__(self, name: str, docs: list[dict[str, Any]]):
        self.name = name
        self.docs = docs
        self.find_calls: list[dict[str, Any]] = []
        self.error: Exception | None = None

    def find(self, query: dict[str, Any]) -> FakeCursor:
        self.find_calls.append(query)
        if self.error is not None:
            return FakeCursor([], self.error)
        return FakeCursor([d for d in self.docs if filter_matches(d, query)])


# === FIXTURES: Sample data ===


@pytest.fixture
def object_id() -> ObjectId:
    return ObjectId(HEX_ID)


@pytest.fixture
def docs(object_id: ObjectId) -> dict[str, dict[str, Any]]:
    """Documents keyed by role; ``string_id`` uses a non-ObjectId id."""
    return {
        "one": {"_id": object_id, "foo": "bar", "tags": ["foo", "bar"]},
        "two": {"_id": ObjectId(), "foo": "bar"},
        "string_id": {"_id": "s2QBCnv6fXv5YbjAP", "tags": ["bar", "baz"]},
        "nested": {
            "_id": ObjectId(),
            "nested": {"field1": "value1", "field2": "", "ref": object_id},
        },
    }


@pytest.fixture
def collection(docs: dict[str, dict[str, Any]]) -> FakeCollection:
    return FakeCollection(
        "test", [docs["one"], docs["two"], docs["string_id"], docs["nested"]]
    )


@pytest.fixture
def make_collection():
    """Factory for extra named collections."""
    return FakeCollection
