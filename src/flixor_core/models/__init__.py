"""Domain models for flixor-cache."""

from flixor_core.models.cache import (
    CacheEntry,
    CacheStats,
    DiskCacheEntry,
    utc_now,
)
from flixor_core.models.media import (
    MediaType,
    PlexMediaContainerResponse,
    PlexMediaItem,
    TMDBCredits,
    TMDBExternalIds,
    TMDBMediaItem,
    TMDBMovieDetails,
    TMDBResultsResponse,
    TMDBSeason,
    TMDBTVDetails,
    TraktMovie,
    TraktSeason,
    TraktShow,
    TraktTrendingMovie,
    TraktTrendingShow,
)

__all__ = [
    "CacheEntry",
    "CacheStats",
    "DiskCacheEntry",
    "MediaType",
    "PlexMediaContainerResponse",
    "PlexMediaItem",
    "TMDBCredits",
    "TMDBExternalIds",
    "TMDBMediaItem",
    "TMDBMovieDetails",
    "TMDBResultsResponse",
    "TMDBSeason",
    "TMDBTVDetails",
    "TraktMovie",
    "TraktSeason",
    "TraktShow",
    "TraktTrendingMovie",
    "TraktTrendingShow",
    "utc_now",
]
