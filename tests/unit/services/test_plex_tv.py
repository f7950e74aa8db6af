"""Tests for PlexTvService."""

from __future__ import annotations

import httpx
import pytest

from flixor_infra.cache.manager import CacheManager
from flixor_services.plex_tv import PlexTvService
from tests.mocks.mock_factories import make_plex_item
from tests.mocks.mock_http import json_responses, make_http_client


def _container(*items: dict[str, object]) -> dict[str, object]:
    return {"MediaContainer": {"size": len(items), "Metadata": list(items)}}


@pytest.mark.unit
class TestPlexTvService:
    """Test Plex.tv endpoints and GUID resolution."""

    @pytest.mark.asyncio
    async def test_watchlist(self, cache: CacheManager) -> None:
        """Watchlist items parse and the token is sent as a header."""
        body = _container({"ratingKey": "a", "title": "Dune", "type": "movie"})
        client, transport = make_http_client(json_responses((200, body)))
        service = PlexTvService(cache, "tok", "cid", http_client=client)

        items = await service.watchlist()

        assert [i.title for i in items] == ["Dune"]
        headers = transport.requests[0].headers
        assert headers["X-Plex-Token"] == "tok"
        assert headers["X-Plex-Client-Identifier"] == "cid"
        assert cache.keys == ["plextv:/library/sections/watchlist/all"]

    @pytest.mark.asyncio
    async def test_update_token(self, cache: CacheManager) -> None:
        """A swapped token is used for later requests."""
        client, transport = make_http_client(json_responses((200, _container())))
        service = PlexTvService(cache, "old", "cid", http_client=client)
        service.update_token("new")
        await service.trending()
        assert transport.requests[0].headers["X-Plex-Token"] == "new"

    @pytest.mark.asyncio
    async def test_metadata_empty(self, cache: CacheManager) -> None:
        """Unknown rating keys resolve to None."""
        client, _ = make_http_client(json_responses((200, _container())))
        service = PlexTvService(cache, "t", "c", http_client=client)
        assert await service.metadata("missing") is None

    @pytest.mark.asyncio
    async def test_tmdb_id_for_movie(self, cache: CacheManager) -> None:
        """A movie's tmdb GUID becomes a tmdb:movie:<id> reference."""
        body = _container(
            {"ratingKey": "x", "title": "Dune", "Guid": [{"id": "tmdb://438631"}]}
        )
        client, transport = make_http_client(json_responses((200, body)))
        service = PlexTvService(cache, "t", "c", http_client=client)

        item = make_plex_item()
        assert await service.tmdb_id_for(item) == "tmdb:movie:438631"
        assert transport.requests[0].url.path == item.key

    @pytest.mark.asyncio
    async def test_tmdb_id_for_show(self, cache: CacheManager) -> None:
        """Shows map to tmdb:tv:<id>."""
        body = _container({"title": "Andor", "Guid": [{"id": "tmdb://83867"}]})
        client, _ = make_http_client(json_responses((200, body)))
        service = PlexTvService(cache, "t", "c", http_client=client)
        item = make_plex_item(type="show", key="/library/metadata/andor")
        assert await service.tmdb_id_for(item) == "tmdb:tv:83867"

    @pytest.mark.asyncio
    async def test_tmdb_id_for_without_key(self, cache: CacheManager) -> None:
        """Items with no metadata key cannot be resolved."""
        client, transport = make_http_client(json_responses((200, _container())))
        service = PlexTvService(cache, "t", "c", http_client=client)
        assert await service.tmdb_id_for(make_plex_item(key=None)) is None
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_tmdb_id_for_swallows_service_errors(self, cache: CacheManager) -> None:
        """A failed metadata lookup resolves to None."""

        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        client, _ = make_http_client(_handler)
        service = PlexTvService(cache, "t", "c", http_client=client, retry_max=1)
        assert await service.tmdb_id_for(make_plex_item()) is None

    @pytest.mark.asyncio
    async def test_tmdb_id_for_absorbs_unusable_bodies(self, cache: CacheManager) -> None:
        """A maintenance page instead of JSON resolves to None."""

        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        client, _ = make_http_client(_handler)
        service = PlexTvService(cache, "t", "c", http_client=client)
        assert await service.tmdb_id_for(make_plex_item()) is None
