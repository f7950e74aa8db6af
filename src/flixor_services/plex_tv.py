"""Plex.tv discover/watchlist client with cached responses."""

from __future__ import annotations

from typing import Any

import structlog

from flixor_core.constants import PLEX_TV_METADATA_URL, CacheTTL
from flixor_core.exceptions import ServiceError
from flixor_core.interfaces.cache import CacheClient
from flixor_core.models.media import PlexMediaContainerResponse, PlexMediaItem
from flixor_services.base import BaseServiceClient

logger = structlog.get_logger()


class PlexTvService(BaseServiceClient):
    """Plex.tv metadata provider: watchlist, discover and trending rows."""

    service_name = "plextv"
    base_url = PLEX_TV_METADATA_URL

    def __init__(
        self,
        cache: CacheClient,
        token: str,
        client_id: str,
        *,
        product: str = "Flixor",
        version: str = "1.0.0",
        platform: str = "Linux",
        **kwargs: Any,
    ) -> None:
        """Initialize with a cache, Plex account token and client identifier."""
        super().__init__(cache, **kwargs)
        self._token = token
        self._client_id = client_id
        self._product = product
        self._version = version
        self._platform = platform

    def update_token(self, token: str) -> None:
        """Swap the account token after re-authentication."""
        self._token = token

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "X-Plex-Token": self._token,
            "X-Plex-Client-Identifier": self._client_id,
            "X-Plex-Product": self._product,
            "X-Plex-Version": self._version,
            "X-Plex-Platform": self._platform,
        }

    async def _items(self, path: str, ttl: float) -> list[PlexMediaItem]:
        response = await self._get(path, PlexMediaContainerResponse, ttl=ttl)
        return response.media_container.metadata

    async def watchlist(self) -> list[PlexMediaItem]:
        """The account watchlist; short TTL since the user edits it."""
        return await self._items("/library/sections/watchlist/all", CacheTTL.SHORT)

    async def discover(self) -> list[PlexMediaItem]:
        return await self._items("/library/sections/discover/all", CacheTTL.TRENDING)

    async def trending(self) -> list[PlexMediaItem]:
        return await self._items("/library/sections/trending/all", CacheTTL.TRENDING)

    async def metadata(self, rating_key: str) -> PlexMediaItem | None:
        """Full metadata (including external GUIDs) for one item."""
        items = await self._items(f"/library/metadata/{rating_key}", CacheTTL.STATIC)
        return items[0] if items else None

    async def tmdb_id_for(self, item: PlexMediaItem) -> str | None:
        """Resolve ``tmdb:<movie|tv>:<id>`` for a watchlist item, or None."""
        if not item.key:
            return None
        try:
            items = await self._items(item.key, CacheTTL.STATIC)
        except ServiceError as e:
            logger.warning("plextv_metadata_failed", title=item.title, error=str(e))
            return None
        if not items:
            return None
        tmdb_id = items[0].tmdb_id()
        if tmdb_id is None:
            return None
        media_type = "movie" if item.type == "movie" else "tv"
        return f"tmdb:{media_type}:{tmdb_id}"
