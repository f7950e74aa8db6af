"""Trakt public API client with cached responses."""

from __future__ import annotations

from typing import Any

from flixor_core.constants import TRAKT_API_URL, CacheTTL
from flixor_core.interfaces.cache import CacheClient
from flixor_core.models.media import (
    TraktMovie,
    TraktSeason,
    TraktShow,
    TraktTrendingMovie,
    TraktTrendingShow,
)
from flixor_services.base import BaseServiceClient


class TraktService(BaseServiceClient):
    """Unauthenticated Trakt endpoints (trending, popular, lookups)."""

    service_name = "trakt"
    base_url = TRAKT_API_URL

    def __init__(self, cache: CacheClient, client_id: str, **kwargs: Any) -> None:
        """Initialize with a cache and the Trakt application client ID."""
        super().__init__(cache, **kwargs)
        self._client_id = client_id

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "trakt-api-version": "2",
            "trakt-api-key": self._client_id,
        }

    @staticmethod
    def _page(page: int, limit: int) -> dict[str, str]:
        return {"page": str(page), "limit": str(limit), "extended": "full"}

    async def trending_movies(self, page: int = 1, limit: int = 20) -> list[TraktTrendingMovie]:
        return await self._get(
            "/movies/trending", list[TraktTrendingMovie], params=self._page(page, limit)
        )

    async def trending_shows(self, page: int = 1, limit: int = 20) -> list[TraktTrendingShow]:
        return await self._get(
            "/shows/trending", list[TraktTrendingShow], params=self._page(page, limit)
        )

    async def popular_movies(self, page: int = 1, limit: int = 20) -> list[TraktMovie]:
        return await self._get(
            "/movies/popular", list[TraktMovie], params=self._page(page, limit)
        )

    async def popular_shows(self, page: int = 1, limit: int = 20) -> list[TraktShow]:
        return await self._get(
            "/shows/popular", list[TraktShow], params=self._page(page, limit)
        )

    async def movie(self, trakt_id: str) -> TraktMovie:
        """Movie by Trakt ID, slug or IMDb ID."""
        return await self._get(
            f"/movies/{trakt_id}", TraktMovie, params={"extended": "full"}, ttl=CacheTTL.STATIC
        )

    async def show(self, trakt_id: str) -> TraktShow:
        """Show by Trakt ID, slug or IMDb ID."""
        return await self._get(
            f"/shows/{trakt_id}", TraktShow, params={"extended": "full"}, ttl=CacheTTL.STATIC
        )

    async def seasons(self, show_id: str) -> list[TraktSeason]:
        return await self._get(
            f"/shows/{show_id}/seasons",
            list[TraktSeason],
            params={"extended": "full"},
            ttl=CacheTTL.DYNAMIC,
        )
