"""Two-tier (memory + disk) TTL cache used by the metadata service wrappers."""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from types import TracebackType
from typing import Any, TypeVar

import structlog

from flixor_core.constants import DEFAULT_MAX_MEMORY_ENTRIES, DEFAULT_SWEEP_INTERVAL_SECONDS
from flixor_core.exceptions import CacheDecodeError
from flixor_core.interfaces.serializer import Serializer
from flixor_core.models.cache import CacheEntry, CacheStats, Clock, DiskCacheEntry, utc_now
from flixor_infra.cache.disk_tier import DiskTier
from flixor_infra.cache.memory_tier import MemoryTier
from flixor_infra.cache.patterns import compile_glob
from flixor_infra.cache.serializer import PydanticJSONSerializer
from flixor_infra.cache.sweeper import PeriodicSweeper

T = TypeVar("T")

logger = structlog.get_logger()


@dataclass
class _Counters:
    memory_hits: int = 0
    disk_hits: int = 0
    misses: int = 0
    writes: int = 0
    evictions: int = 0
    purged: int = 0


class CacheManager:
    """Key/value store with TTLs over a bounded memory tier and a disk tier.

    Every operation runs under a single ``asyncio.Lock``, so reads, writes
    and the background sweep never interleave. Disk I/O happens in worker
    threads while the lock is held.

    Lookups never raise: misses, expired entries and undecodable payloads
    all return None, and bad records are purged on the way. Only ``set``
    raises, with CacheEncodeError, when the value cannot be serialized.

    Usage::

        async with CacheManager(Path("~/.cache/FlixorCache")) as cache:
            await cache.set("tmdb:/movie/550", details, ttl=CacheTTL.STATIC)
            details = await cache.get("tmdb:/movie/550", TMDBMovieDetails)
    """

    def __init__(
        self,
        directory: Path,
        *,
        max_memory_entries: int = DEFAULT_MAX_MEMORY_ENTRIES,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        disk_pattern_invalidation: bool = True,
        serializer: Serializer | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize both tiers. The sweep starts only via ``start()``."""
        self._memory = MemoryTier(max_memory_entries)
        self._disk = DiskTier(directory)
        self._serializer: Serializer = serializer or PydanticJSONSerializer()
        self._clock = clock
        self._disk_pattern_invalidation = disk_pattern_invalidation
        self._lock = asyncio.Lock()
        self._counters = _Counters()
        self._sweeper = PeriodicSweeper(self.remove_expired, sweep_interval_seconds)

    # --- lifecycle ---

    async def __aenter__(self) -> CacheManager:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()

    def start(self) -> None:
        """Start the periodic expiry sweep on the running loop."""
        self._sweeper.start()

    async def stop(self) -> None:
        """Stop the periodic sweep; in-flight operations finish normally."""
        await self._sweeper.stop()

    # --- CacheClient ---

    async def get(self, key: str, type_: type[T]) -> T | None:
        """Return the cached value for ``key`` decoded as ``type_``, or None."""
        async with self._lock:
            now = self._clock()

            entry = self._memory.get(key)
            if entry is not None:
                if entry.is_expired(now):
                    self._memory.pop(key)
                    self._counters.purged += 1
                    logger.debug("cache_expired", key=key, tier="memory")
                else:
                    try:
                        value = self._serializer.decode(entry.data, type_)
                    except CacheDecodeError:
                        self._memory.pop(key)
                        self._counters.purged += 1
                        logger.warning("cache_decode_failed", key=key, tier="memory")
                    else:
                        self._counters.memory_hits += 1
                        logger.debug("cache_hit", key=key, tier="memory")
                        return value

            try:
                disk_entry = await asyncio.to_thread(self._disk.load, key)
            except CacheDecodeError:
                await asyncio.to_thread(self._disk.delete, key)
                self._counters.purged += 1
                logger.warning("cache_record_corrupt", key=key)
                disk_entry = None

            if disk_entry is not None:
                if disk_entry.is_expired(now):
                    await asyncio.to_thread(self._disk.delete, key)
                    self._counters.purged += 1
                    logger.debug("cache_expired", key=key, tier="disk")
                else:
                    promoted = disk_entry.to_memory_entry()
                    try:
                        value = self._serializer.decode(promoted.data, type_)
                    except CacheDecodeError:
                        await asyncio.to_thread(self._disk.delete, key)
                        self._counters.purged += 1
                        logger.warning("cache_decode_failed", key=key, tier="disk")
                    else:
                        self._put_memory(key, promoted)
                        self._counters.disk_hits += 1
                        logger.debug("cache_hit", key=key, tier="disk")
                        return value

            self._counters.misses += 1
            logger.debug("cache_miss", key=key)
            return None

    async def set(self, key: str, value: Any, ttl: float) -> None:
        """Cache ``value`` under ``key`` for ``ttl`` seconds.

        A non-positive or NaN TTL is a no-op; a TTL past the end of the
        calendar (including infinity) never expires. Raises CacheEncodeError
        if the value cannot be serialized; existing entries are left
        untouched then.
        """
        if math.isnan(ttl) or ttl <= 0:
            return

        data = self._serializer.encode(value)

        async with self._lock:
            expires_at = _expiry(self._clock(), ttl)
            self._put_memory(key, CacheEntry(data=data, expires_at=expires_at))
            record = DiskCacheEntry.from_payload(key, data, expires_at)
            await asyncio.to_thread(self._disk.store, key, record)
            self._counters.writes += 1
            logger.debug("cache_set", key=key, ttl=ttl, size=len(data))

    async def remove(self, key: str) -> None:
        """Delete ``key`` from both tiers."""
        async with self._lock:
            self._memory.pop(key)
            await asyncio.to_thread(self._disk.delete, key)

    async def clear(self) -> None:
        """Empty the memory tier and delete every file in the cache directory."""
        async with self._lock:
            self._memory.clear()
            removed = await asyncio.to_thread(self._disk.clear)
            logger.info("cache_cleared", disk_files=removed)

    async def invalidate_pattern(self, pattern: str) -> int:
        """Remove every key fully matching a ``*`` glob.

        Disk records are matched through the key stored inside each record
        unless disk pattern invalidation is disabled. Returns the number of
        memory entries plus disk records removed.
        """
        regex = compile_glob(pattern)
        async with self._lock:
            removed = len(self._memory.remove_matching(regex))
            if self._disk_pattern_invalidation:
                removed += await asyncio.to_thread(self._disk.remove_matching, regex)
            logger.info("cache_invalidated", pattern=pattern, removed=removed)
            return removed

    # --- maintenance ---

    async def remove_expired(self) -> int:
        """Purge expired entries from both tiers and corrupt records from disk."""
        async with self._lock:
            now = self._clock()
            removed = len(self._memory.purge_expired(now))
            removed += await asyncio.to_thread(self._disk.purge_expired, now)
            self._counters.purged += removed
            if removed:
                logger.info("cache_sweep_complete", removed=removed)
            return removed

    # --- introspection ---

    @property
    def count(self) -> int:
        """Number of entries in the memory tier."""
        return len(self._memory)

    @property
    def keys(self) -> list[str]:
        """Live keys of the memory tier."""
        return self._memory.keys()

    @property
    def directory(self) -> Path:
        """Directory backing the disk tier."""
        return self._disk.directory

    async def disk_cache_size(self) -> int:
        """Total bytes used by the disk tier; 0 if it cannot be measured."""
        async with self._lock:
            return await asyncio.to_thread(self._disk.size_bytes)

    async def stats(self) -> CacheStats:
        """Snapshot of tier sizes and lifetime counters."""
        async with self._lock:
            disk_entries = await asyncio.to_thread(self._disk.entry_count)
            disk_bytes = await asyncio.to_thread(self._disk.size_bytes)
            return CacheStats(
                memory_entries=len(self._memory),
                memory_limit=self._memory.max_entries,
                disk_entries=disk_entries,
                disk_bytes=disk_bytes,
                memory_hits=self._counters.memory_hits,
                disk_hits=self._counters.disk_hits,
                misses=self._counters.misses,
                writes=self._counters.writes,
                evictions=self._counters.evictions,
                purged=self._counters.purged,
            )

    def _put_memory(self, key: str, entry: CacheEntry) -> None:
        evicted = self._memory.put(key, entry)
        if evicted:
            self._counters.evictions += len(evicted)
            logger.debug("cache_evicted", count=len(evicted))


def _expiry(now: datetime, ttl: float) -> datetime:
    """``now + ttl`` clamped to the largest representable instant."""
    try:
        return now + timedelta(seconds=ttl)
    except OverflowError:
        return datetime.max.replace(tzinfo=UTC)
