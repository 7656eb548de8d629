# src/core/paths.py — v1
"""Nested field access for dotted / bracketed document paths."""

from __future__ import annotations

import re
from typing import Any

_BRACKET_RE = re.compile(r"\[([^\]]*)\]")


class _Missing:
    """Sentinel for a path that does not resolve."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def split_path(path: str) -> list[str]:
    """Normalize ``a[0].b`` / ``.a.b`` into ``["a", "0", "b"]``."""
    normalized = _BRACKET_RE.sub(r".\1", path)
    if normalized.startswith("."):
        normalized = normalized[1:]
    return normalized.split(".") if normalized else []


def get_nested_value(document: Any, path: str) -> Any:
    """Resolve *path* against *document*.

    Returns ``MISSING`` as soon as a segment key is absent. Falsy values
    (``""``, ``None``, ``False``, ``0``) are real values and are returned.

    Integer segments index into lists. Any other segment applied to a list
    is looked up in every element that is a mapping, and the found values
    are returned as a flat list (the way document stores match
    ``"items.sku"`` against an array of sub-documents).
    """
    current = document
    for segment in split_path(path):
        if isinstance(current, dict):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, (list, tuple)):
            if segment.isdigit():
                index = int(segment)
                if index >= len(current):
                    return MISSING
                current = current[index]
                continue
            collected: list[Any] = []
            for item in current:
                if isinstance(item, dict) and segment in item:
                    value = item[segment]
                    if isinstance(value, list):
                        collected.extend(value)
                    else:
                        collected.append(value)
            if not collected:
                return MISSING
            current = collected
        else:
            return MISSING
    return current
