"""Abstract cache interface."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class CacheClient(Protocol):
    """TTL key/value store consumed by the metadata service wrappers."""

    async def get(self, key: str, type_: type[T]) -> T | None:
        """Retrieve a value decoded as ``type_``, or None on a miss."""
        ...

    async def set(self, key: str, value: Any, ttl: float) -> None:
        """Store a value for ``ttl`` seconds. A non-positive TTL is a no-op."""
        ...

    async def remove(self, key: str) -> None:
        """Delete a key. Absent keys are ignored."""
        ...

    async def clear(self) -> None:
        """Delete every cached entry."""
        ...

    async def invalidate_pattern(self, pattern: str) -> int:
        """Delete every key matching a ``*`` glob; return how many were removed."""
        ...
