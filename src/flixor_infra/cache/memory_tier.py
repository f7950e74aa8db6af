"""Bounded in-memory tier of the cache."""

from __future__ import annotations

import heapq
import re
from datetime import datetime

from flixor_core.models.cache import CacheEntry
from flixor_infra.cache.patterns import matches


class MemoryTier:
    """Key to CacheEntry table bounded by a maximum entry count.

    When the bound is exceeded the entries closest to expiring are dropped
    first. Not thread-safe; CacheManager serializes access.
    """

    def __init__(self, max_entries: int) -> None:
        """Initialize an empty tier holding at most ``max_entries`` entries."""
        if max_entries < 1:
            msg = "max_entries must be at least 1"
            raise ValueError(msg)
        self._max_entries = max_entries
        self._entries: dict[str, CacheEntry] = {}

    @property
    def max_entries(self) -> int:
        """Configured capacity."""
        return self._max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[str]:
        """Snapshot of the live keys."""
        return list(self._entries)

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for ``key`` without checking expiry."""
        return self._entries.get(key)

    def put(self, key: str, entry: CacheEntry) -> list[str]:
        """Insert or overwrite ``key``, then trim. Returns the evicted keys."""
        self._entries[key] = entry
        return self.trim()

    def pop(self, key: str) -> CacheEntry | None:
        """Remove ``key`` if present."""
        return self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def trim(self) -> list[str]:
        """Evict soonest-to-expire entries until back within capacity."""
        overflow = len(self._entries) - self._max_entries
        if overflow <= 0:
            return []
        victims = heapq.nsmallest(
            overflow,
            self._entries,
            key=lambda k: self._entries[k].expires_at,
        )
        for key in victims:
            del self._entries[key]
        return victims

    def purge_expired(self, now: datetime) -> list[str]:
        """Remove every expired entry and return their keys."""
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return expired

    def remove_matching(self, regex: re.Pattern[str]) -> list[str]:
        """Remove every key fully matching ``regex`` and return them."""
        doomed = [key for key in self._entries if matches(regex, key)]
        for key in doomed:
            del self._entries[key]
        return doomed
