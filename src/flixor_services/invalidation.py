"""Service-scoped cache invalidation, used on sign-out and manual refresh."""

from __future__ import annotations

import structlog

from flixor_core.constants import SERVICE_CACHE_PATTERNS
from flixor_core.interfaces.cache import CacheClient

logger = structlog.get_logger()


async def invalidate_service_cache(cache: CacheClient, service: str) -> int:
    """Drop every cached response owned by ``service``.

    ``service`` is one of ``tmdb``, ``trakt`` or ``plex`` (the Plex.tv
    keys). Returns the number of removed entries.
    """
    try:
        patterns = SERVICE_CACHE_PATTERNS[service]
    except KeyError:
        known = ", ".join(sorted(SERVICE_CACHE_PATTERNS))
        msg = f"Unknown service {service!r}; expected one of: {known}"
        raise ValueError(msg) from None

    removed = 0
    for pattern in patterns:
        removed += await cache.invalidate_pattern(pattern)
    logger.info("service_cache_invalidated", service=service, removed=removed)
    return removed


async def clear_all_caches(cache: CacheClient) -> None:
    """Drop every cached response of every service."""
    await cache.clear()
    logger.info("all_caches_cleared")
