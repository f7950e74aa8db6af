"""Cache entry and statistics models."""

from __future__ import annotations

import base64
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Encoded payload held by the memory tier."""

    data: bytes
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` is past the expiry instant."""
        return _as_utc(now) > _as_utc(self.expires_at)


class DiskCacheEntry(BaseModel):
    """One persisted record of the disk tier."""

    key: str | None = Field(
        default=None, description="Original cache key, used for pattern invalidation"
    )
    data: str = Field(description="Base64-encoded payload bytes")
    expires_at: datetime = Field(description="Absolute expiry instant")

    @field_validator("data")
    @classmethod
    def validate_base64(cls, value: str) -> str:
        """Reject payloads that are not valid base64."""
        base64.b64decode(value, validate=True)
        return value

    @classmethod
    def from_payload(cls, key: str, payload: bytes, expires_at: datetime) -> DiskCacheEntry:
        """Build a record from raw payload bytes."""
        return cls(
            key=key,
            data=base64.b64encode(payload).decode("ascii"),
            expires_at=expires_at,
        )

    @property
    def payload(self) -> bytes:
        """Decoded payload bytes. Raises ValueError on malformed base64."""
        return base64.b64decode(self.data, validate=True)

    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` is past the expiry instant."""
        return _as_utc(now) > _as_utc(self.expires_at)

    def to_memory_entry(self) -> CacheEntry:
        """Convert to the memory-tier representation."""
        return CacheEntry(data=self.payload, expires_at=self.expires_at)


class CacheStats(BaseModel):
    """Point-in-time view of both cache tiers and lifetime counters."""

    memory_entries: int = Field(description="Entries currently in the memory tier")
    memory_limit: int = Field(description="Configured memory tier bound")
    disk_entries: int = Field(default=0, description="Records currently on disk")
    disk_bytes: int = Field(default=0, description="Total size of the disk tier")
    memory_hits: int = Field(default=0, description="Lookups answered from memory")
    disk_hits: int = Field(default=0, description="Lookups answered from disk")
    misses: int = Field(default=0, description="Lookups answered from neither tier")
    writes: int = Field(default=0, description="Successful set operations")
    evictions: int = Field(default=0, description="Memory entries evicted for capacity")
    purged: int = Field(default=0, description="Expired or corrupt entries deleted")

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups answered from either tier."""
        lookups = self.memory_hits + self.disk_hits + self.misses
        if lookups == 0:
            return 0.0
        return (self.memory_hits + self.disk_hits) / lookups
