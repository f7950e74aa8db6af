"""Factory functions wiring the cache and service wrappers from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from flixor_infra.cache.manager import CacheManager

if TYPE_CHECKING:
    from flixor_core.config.settings import Settings
    from flixor_core.interfaces.cache import CacheClient
    from flixor_services.plex_tv import PlexTvService
    from flixor_services.tmdb import TMDBService
    from flixor_services.trakt import TraktService


def create_cache_manager(settings: Settings) -> CacheManager:
    """Create the two-tier cache described by ``settings``.

    The background sweep is not started; use the manager as an async
    context manager or call ``start()`` from a running loop.
    """
    return CacheManager(
        settings.disk_cache_path,
        max_memory_entries=settings.max_memory_entries,
        sweep_interval_seconds=settings.sweep_interval_seconds,
        disk_pattern_invalidation=settings.disk_pattern_invalidation,
    )


def _client_kwargs(settings: Settings, http_client: httpx.AsyncClient | None) -> dict[str, Any]:
    return {
        "http_client": http_client,
        "timeout_seconds": settings.http_timeout_seconds,
        "retry_max": settings.http_retry_max,
        "retry_wait_min": settings.http_retry_wait_min,
        "retry_wait_max": settings.http_retry_wait_max,
    }


def create_tmdb_service(
    settings: Settings,
    cache: CacheClient,
    http_client: httpx.AsyncClient | None = None,
) -> TMDBService:
    """Create the TMDB client. Requires ``tmdb_api_key``."""
    from flixor_services.tmdb import TMDBService

    if settings.tmdb_api_key is None:
        msg = "tmdb_api_key is required for the TMDB service"
        raise ValueError(msg)
    return TMDBService(
        cache,
        settings.tmdb_api_key.get_secret_value(),
        language=settings.tmdb_language,
        **_client_kwargs(settings, http_client),
    )


def create_trakt_service(
    settings: Settings,
    cache: CacheClient,
    http_client: httpx.AsyncClient | None = None,
) -> TraktService:
    """Create the Trakt client. Requires ``trakt_client_id``."""
    from flixor_services.trakt import TraktService

    if settings.trakt_client_id is None:
        msg = "trakt_client_id is required for the Trakt service"
        raise ValueError(msg)
    return TraktService(
        cache,
        settings.trakt_client_id.get_secret_value(),
        **_client_kwargs(settings, http_client),
    )


def create_plex_tv_service(
    settings: Settings,
    cache: CacheClient,
    http_client: httpx.AsyncClient | None = None,
) -> PlexTvService:
    """Create the Plex.tv client. Requires ``plex_token``."""
    from flixor_services.plex_tv import PlexTvService

    if settings.plex_token is None:
        msg = "plex_token is required for the Plex.tv service"
        raise ValueError(msg)
    return PlexTvService(
        cache,
        settings.plex_token.get_secret_value(),
        settings.plex_client_id,
        **_client_kwargs(settings, http_client),
    )
