# src/store/sources.py — v1
"""Query sources: the one capability the lookup engine needs from a store.

Two variants are supported:

* ``RawCollection``: a PyMongo async (or Motor) collection. ``find`` returns
  a cursor drained with ``to_list``; documents come back as plain dicts.
* ``ModelBacked``: a pydantic-based ODM document class (Beanie style).
  ``Model.find(filter).to_list()`` returns model instances which are dumped
  back to plain dicts so matching sees the stored field names.

The variant is chosen once by ``as_query_source``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from doccache.config.settings import ConfigurationError


class QuerySource(ABC):
    """Executes a filter against one named collection."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Collection name, used to scope cache keys."""

    @abstractmethod
    async def find(self, filter: dict[str, Any]) -> list[dict[str, Any]]:
        """Return every document matching *filter*, in any order."""


class RawCollection(QuerySource):
    """Driver-level async collection."""

    def __init__(self, collection: Any) -> None:
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    @property
    def collection(self) -> Any:
        return self._collection

    async def find(self, filter: dict[str, Any]) -> list[dict[str, Any]]:
        cursor = self._collection.find(filter)
        return await cursor.to_list(length=None)


class ModelBacked(QuerySource):
    """ODM document class whose instances are pydantic models."""

    def __init__(self, model: type[BaseModel]) -> None:
        self._model = model

    @property
    def name(self) -> str:
        getter = getattr(self._model, "get_collection_name", None)
        if callable(getter):
            name = getter()
            if name:
                return name
        settings = getattr(self._model, "Settings", None)
        return getattr(settings, "name", None) or self._model.__name__

    @property
    def model(self) -> type[BaseModel]:
        return self._model

    async def find(self, filter: dict[str, Any]) -> list[dict[str, Any]]:
        found = await self._model.find(filter).to_list()  # type: ignore[attr-defined]
        return [
            doc.model_dump(by_alias=True) if isinstance(doc, BaseModel) else doc
            for doc in found
        ]


def is_model(handle: Any) -> bool:
    """True for a pydantic model class exposing a ``find`` classmethod."""
    return (
        isinstance(handle, type)
        and issubclass(handle, BaseModel)
        and callable(getattr(handle, "find", None))
    )


def is_collection(handle: Any) -> bool:
    """True for a collection instance with ``find`` and a string ``name``."""
    return (
        not isinstance(handle, type)
        and callable(getattr(handle, "find", None))
        and isinstance(getattr(handle, "name", None), str)
    )


def as_query_source(handle: Any) -> QuerySource:
    """Wrap a store handle in the matching QuerySource variant.

    Raises:
        ConfigurationError: If *handle* is neither a collection nor a model.
    """
    if isinstance(handle, QuerySource):
        return handle
    if is_model(handle):
        return ModelBacked(handle)
    if is_collection(handle):
        return RawCollection(handle)
    raise ConfigurationError(
        f"Expected an async collection or an ODM model class, got {type(handle).__name__}"
    )
