"""TMDB v3 client with cached responses."""

from __future__ import annotations

from typing import Any

from flixor_core.constants import TMDB_API_URL, TMDB_IMAGE_URL, CacheTTL
from flixor_core.interfaces.cache import CacheClient
from flixor_core.models.media import (
    MediaType,
    TMDBCredits,
    TMDBExternalIds,
    TMDBMovieDetails,
    TMDBResultsResponse,
    TMDBSeason,
    TMDBTVDetails,
)
from flixor_services.base import BaseServiceClient


class TMDBService(BaseServiceClient):
    """Read-only access to the TMDB endpoints the browsing client uses."""

    service_name = "tmdb"
    base_url = TMDB_API_URL

    def __init__(
        self,
        cache: CacheClient,
        api_key: str,
        *,
        language: str = "en-US",
        **kwargs: Any,
    ) -> None:
        """Initialize with a cache, API key and response language."""
        super().__init__(cache, **kwargs)
        self._api_key = api_key
        self._language = language

    def _auth_params(self) -> dict[str, str]:
        return {"api_key": self._api_key}

    def _params(self, **extra: object) -> dict[str, str]:
        params = {"language": self._language}
        params.update({k: str(v) for k, v in extra.items() if v is not None})
        return params

    # --- Images ---

    @staticmethod
    def image_url(path: str | None, size: str) -> str | None:
        """Absolute image URL for a TMDB file path, or None if absent."""
        if not path:
            return None
        return f"{TMDB_IMAGE_URL}/{size}{path}"

    def poster_url(self, path: str | None, size: str = "w500") -> str | None:
        return self.image_url(path, size)

    def backdrop_url(self, path: str | None, size: str = "w1280") -> str | None:
        return self.image_url(path, size)

    def profile_url(self, path: str | None, size: str = "w185") -> str | None:
        return self.image_url(path, size)

    # --- Movies ---

    async def movie_details(self, movie_id: int) -> TMDBMovieDetails:
        """Movie details with external IDs appended."""
        return await self._get(
            f"/movie/{movie_id}",
            TMDBMovieDetails,
            params=self._params(append_to_response="external_ids"),
            ttl=CacheTTL.TRENDING,
        )

    async def movie_credits(self, movie_id: int) -> TMDBCredits:
        return await self._get(
            f"/movie/{movie_id}/credits", TMDBCredits, params=self._params()
        )

    async def popular_movies(self, page: int = 1) -> TMDBResultsResponse:
        return await self._get(
            "/movie/popular", TMDBResultsResponse, params=self._params(page=page)
        )

    # --- TV ---

    async def tv_details(self, tv_id: int) -> TMDBTVDetails:
        """Show details with external IDs appended."""
        return await self._get(
            f"/tv/{tv_id}",
            TMDBTVDetails,
            params=self._params(append_to_response="external_ids"),
            ttl=CacheTTL.TRENDING,
        )

    async def season_details(self, tv_id: int, season_number: int) -> TMDBSeason:
        return await self._get(
            f"/tv/{tv_id}/season/{season_number}",
            TMDBSeason,
            params=self._params(),
            ttl=CacheTTL.DYNAMIC,
        )

    async def popular_tv(self, page: int = 1) -> TMDBResultsResponse:
        return await self._get(
            "/tv/popular", TMDBResultsResponse, params=self._params(page=page)
        )

    # --- Shared ---

    async def external_ids(self, media_type: MediaType, tmdb_id: int) -> TMDBExternalIds:
        """IMDb/TVDB identifiers; these never change, so cache for a day."""
        return await self._get(
            f"/{media_type.value}/{tmdb_id}/external_ids",
            TMDBExternalIds,
            params=self._params(),
            ttl=CacheTTL.STATIC,
        )

    async def trending(
        self,
        media_type: MediaType = MediaType.ALL,
        time_window: str = "week",
        page: int = 1,
    ) -> TMDBResultsResponse:
        return await self._get(
            f"/trending/{media_type.value}/{time_window}",
            TMDBResultsResponse,
            params=self._params(page=page),
            ttl=CacheTTL.TRENDING,
        )
