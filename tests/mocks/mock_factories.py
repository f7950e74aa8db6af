"""Factories for cache test doubles and sample metadata models."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

from flixor_core.models.media import (
    PlexGuid,
    PlexMediaItem,
    TMDBExternalIds,
    TMDBGenre,
    TMDBMovieDetails,
    TraktIds,
    TraktMovie,
)
from flixor_infra.cache.manager import CacheManager

EPOCH = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


class FrozenClock:
    """Manually advanced clock for deterministic TTL tests."""

    def __init__(self, start: datetime = EPOCH) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        """Move the clock forward."""
        self.now += timedelta(seconds=seconds)


def make_cache_manager(
    directory: Path,
    clock: FrozenClock | None = None,
    **kwargs: object,
) -> CacheManager:
    """Create a CacheManager on ``directory`` driven by a frozen clock."""
    return CacheManager(directory, clock=clock or FrozenClock(), **kwargs)  # type: ignore[arg-type]


def make_movie_details(**overrides: object) -> TMDBMovieDetails:
    """Create a minimal valid TMDBMovieDetails."""
    defaults: dict[str, object] = {
        "id": 550,
        "title": "Fight Club",
        "overview": "An insomniac office worker...",
        "runtime": 139,
        "release_date": "1999-10-15",
        "genres": [TMDBGenre(id=18, name="Drama")],
        "external_ids": TMDBExternalIds(imdb_id="tt0137523"),
    }
    defaults.update(overrides)
    return TMDBMovieDetails(**defaults)  # type: ignore[arg-type]


def make_trakt_movie(**overrides: object) -> TraktMovie:
    """Create a minimal valid TraktMovie."""
    defaults: dict[str, object] = {
        "title": "Inception",
        "year": 2010,
        "ids": TraktIds(trakt=16662, slug="inception-2010", imdb="tt1375666", tmdb=27205),
        "genres": ["action", "science-fiction"],
    }
    defaults.update(overrides)
    return TraktMovie(**defaults)  # type: ignore[arg-type]


def make_plex_item(**overrides: object) -> PlexMediaItem:
    """Create a minimal valid PlexMediaItem."""
    defaults: dict[str, object] = {
        "rating_key": "5d776825880197001ec967c6",
        "key": "/library/metadata/5d776825880197001ec967c6",
        "type": "movie",
        "title": "Dune",
        "year": 2021,
        "guids": [PlexGuid(id="imdb://tt1160419"), PlexGuid(id="tmdb://438631")],
    }
    defaults.update(overrides)
    return PlexMediaItem(**defaults)  # type: ignore[arg-type]
