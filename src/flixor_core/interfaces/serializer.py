"""Abstract payload serializer interface."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Serializer(Protocol):
    """Converts cached values to bytes and back against a caller-chosen type."""

    def encode(self, value: Any) -> bytes:
        """Serialize a value. Raises CacheEncodeError on failure."""
        ...

    def decode(self, data: bytes, type_: type[T]) -> T:
        """Deserialize bytes as ``type_``. Raises CacheDecodeError on failure."""
        ...
