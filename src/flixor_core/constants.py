"""Shared constants for flixor-cache."""

from __future__ import annotations


class CacheTTL:
    """TTL presets in seconds, picked by callers per kind of data."""

    SHORT = 60 * 5
    DYNAMIC = 60 * 15
    TRENDING = 60 * 30
    STATIC = 60 * 60 * 24
    NONE = 0


# Memory tier bound and sweep cadence
DEFAULT_MAX_MEMORY_ENTRIES = 500
DEFAULT_SWEEP_INTERVAL_SECONDS = 60 * 5

# Disk layout
DEFAULT_CACHE_SUBDIRECTORY = "FlixorCache"
DISK_ENTRY_SUFFIX = ".cache"
DISK_TEMP_SUFFIX = ".tmp"

# Service base URLs
TMDB_API_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_URL = "https://image.tmdb.org/t/p"
TRAKT_API_URL = "https://api.trakt.tv"
PLEX_TV_METADATA_URL = "https://discover.provider.plex.tv"

# Key prefixes owned by each service, used for scoped invalidation
SERVICE_CACHE_PATTERNS: dict[str, tuple[str, ...]] = {
    "tmdb": ("tmdb:*",),
    "trakt": ("trakt:*",),
    "plex": ("plextv:*",),
}
