"""Persistent file-per-key tier of the cache."""

from __future__ import annotations

import contextlib
import hashlib
import os
import re
import tempfile
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import structlog
from pydantic import ValidationError

from flixor_core.constants import DISK_ENTRY_SUFFIX, DISK_TEMP_SUFFIX
from flixor_core.exceptions import CacheDecodeError
from flixor_core.models.cache import DiskCacheEntry
from flixor_infra.cache.patterns import matches

logger = structlog.get_logger()


def hash_key(key: str) -> str:
    """SHA-256 hex digest of a cache key, used as its filename stem."""
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


class DiskTier:
    """One JSON record per key under a dedicated directory.

    Blocking I/O throughout; CacheManager runs these methods in worker
    threads and serializes them. Every failure other than a corrupt record
    on ``load`` is logged and absorbed.
    """

    def __init__(self, directory: Path) -> None:
        """Initialize with the cache directory, creating it if possible."""
        self._directory = directory
        self._ensure_directory()

    @property
    def directory(self) -> Path:
        """Directory owned by this tier."""
        return self._directory

    def path_for(self, key: str) -> Path:
        """Deterministic file path of ``key``'s record."""
        return self._directory / f"{hash_key(key)}{DISK_ENTRY_SUFFIX}"

    def load(self, key: str) -> DiskCacheEntry | None:
        """Read the record for ``key``.

        Returns None when no record exists or it cannot be read. Raises
        CacheDecodeError when the file exists but is not a valid record.
        """
        path = self.path_for(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("cache_disk_read_failed", path=str(path), error=str(e))
            return None
        return _parse(raw, path)

    def store(self, key: str, entry: DiskCacheEntry) -> bool:
        """Atomically write ``entry`` as the record for ``key``.

        The record is written to a temp file in the same directory and then
        renamed over the target, so readers never observe a partial file.
        """
        path = self.path_for(key)
        tmp_name: str | None = None
        try:
            self._ensure_directory()
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=path.stem, suffix=DISK_TEMP_SUFFIX
            )
            with os.fdopen(fd, "wb") as fh:
                fh.write(entry.model_dump_json().encode("utf-8"))
            os.replace(tmp_name, path)
        except OSError as e:
            logger.warning("cache_disk_write_failed", key=key, error=str(e))
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            return False
        return True

    def delete(self, key: str) -> bool:
        """Delete ``key``'s record. Returns True if a file was removed."""
        return _unlink(self.path_for(key))

    def clear(self) -> int:
        """Delete every file in the directory and return how many were removed."""
        return sum(1 for path in self._files() if _unlink(path))

    def size_bytes(self) -> int:
        """Total size of all files in the directory; 0 if it cannot be listed."""
        total = 0
        try:
            for path in self._files():
                total += path.stat().st_size
        except OSError:
            return 0
        return total

    def entry_count(self) -> int:
        """Number of record files on disk."""
        return sum(1 for _ in self._records())

    def purge_expired(self, now: datetime) -> int:
        """Delete expired and corrupt records; return how many were removed."""
        removed = 0
        for path, entry in self._scan():
            if entry is None or entry.is_expired(now):
                removed += _unlink(path)
        return removed

    def remove_matching(self, regex: re.Pattern[str]) -> int:
        """Delete records whose stored key fully matches ``regex``.

        Records written without a key cannot be matched and are left to
        expire; corrupt records are deleted.
        """
        removed = 0
        for path, entry in self._scan():
            if entry is None or (entry.key is not None and matches(regex, entry.key)):
                removed += _unlink(path)
        return removed

    def _ensure_directory(self) -> None:
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(
                "cache_directory_unavailable", path=str(self._directory), error=str(e)
            )

    def _files(self) -> list[Path]:
        try:
            return [p for p in self._directory.iterdir() if p.is_file()]
        except OSError:
            return []

    def _records(self) -> Iterator[Path]:
        return (p for p in self._files() if p.suffix == DISK_ENTRY_SUFFIX)

    def _scan(self) -> Iterator[tuple[Path, DiskCacheEntry | None]]:
        """Yield each record file with its parsed entry, or None if corrupt."""
        for path in self._records():
            try:
                raw = path.read_bytes()
            except OSError:
                continue
            try:
                entry: DiskCacheEntry | None = _parse(raw, path)
            except CacheDecodeError:
                entry = None
            yield path, entry


def _parse(raw: bytes, path: Path) -> DiskCacheEntry:
    try:
        entry = DiskCacheEntry.model_validate_json(raw)
    except ValidationError as e:
        msg = f"Corrupt cache record {path.name}"
        raise CacheDecodeError(msg) from e
    return entry


def _unlink(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("cache_disk_delete_failed", path=str(path), error=str(e))
        return False
    return True
