"""Integration tests for cache persistence across manager instances."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from flixor_core.constants import CacheTTL
from flixor_core.models.media import TMDBMovieDetails, TraktMovie
from flixor_infra.cache.disk_tier import hash_key
from flixor_infra.cache.manager import CacheManager
from flixor_services.factories import create_cache_manager
from tests.mocks.mock_factories import make_movie_details, make_trakt_movie
from tests.mocks.mock_settings import make_real_settings

pytestmark = pytest.mark.integration


class TestCachePersistence:
    """CacheManager against the real filesystem."""

    @pytest.mark.asyncio
    async def test_records_survive_restart(self, tmp_path: Path) -> None:
        """A new manager on the same directory reads earlier writes."""
        settings = make_real_settings(tmp_path)
        async with create_cache_manager(settings) as first:
            await first.set("tmdb:/movie/550", make_movie_details(), CacheTTL.STATIC)
            await first.set("trakt:/movies/inception-2010", make_trakt_movie(), CacheTTL.STATIC)

        async with create_cache_manager(settings) as second:
            assert second.count == 0
            movie = await second.get("tmdb:/movie/550", TMDBMovieDetails)
            trakt = await second.get("trakt:/movies/inception-2010", TraktMovie)

        assert movie == make_movie_details()
        assert trakt is not None
        assert trakt.ids.tmdb == 27205

    @pytest.mark.asyncio
    async def test_record_layout(self, tmp_path: Path) -> None:
        """Records are JSON files named by the SHA-256 of the key."""
        directory = tmp_path / "FlixorCache"
        cache = CacheManager(directory)
        await cache.set("plextv:/library/sections/watchlist/all", [], CacheTTL.SHORT)

        files = list(directory.iterdir())
        assert [f.name for f in files] == [
            f"{hash_key('plextv:/library/sections/watchlist/all')}.cache"
        ]
        record = json.loads(files[0].read_text())
        assert record["key"] == "plextv:/library/sections/watchlist/all"
        assert record["data"] == "W10="

    @pytest.mark.asyncio
    async def test_invalidation_across_instances(self, tmp_path: Path) -> None:
        """Pattern invalidation in one instance removes another's records."""
        directory = tmp_path / "FlixorCache"
        writer = CacheManager(directory)
        for i in range(3):
            await writer.set(f"tmdb:/movie/{i}", i, 60)
        await writer.set("trakt:/shows/andor", "andor", 60)

        other = CacheManager(directory)
        assert await other.invalidate_pattern("tmdb:/movie/*") == 3
        assert await other.get("trakt:/shows/andor", str) == "andor"
        assert await writer.disk_cache_size() > 0
