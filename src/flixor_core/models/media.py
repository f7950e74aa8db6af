"""Response models for the TMDB, Trakt and Plex.tv metadata APIs.

Only the fields the browsing client reads are declared; unknown fields in
API responses are ignored.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class MediaType(StrEnum):
    """Kinds of media addressed by the metadata APIs."""

    MOVIE = "movie"
    TV = "tv"
    ALL = "all"


# --- TMDB ---


class TMDBGenre(BaseModel):
    """TMDB genre."""

    id: int
    name: str


class TMDBMediaItem(BaseModel):
    """Movie or show entry in a TMDB list response."""

    id: int
    media_type: str | None = None
    title: str | None = None
    name: str | None = None
    overview: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    vote_average: float | None = None
    release_date: str | None = None
    first_air_date: str | None = None
    genre_ids: list[int] = Field(default_factory=list)

    @property
    def display_title(self) -> str:
        """Movie title or show name, whichever is present."""
        return self.title or self.name or ""


class TMDBResultsResponse(BaseModel):
    """Paged TMDB list response."""

    page: int = 1
    results: list[TMDBMediaItem] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0


class TMDBExternalIds(BaseModel):
    """Cross-database identifiers for a TMDB title."""

    imdb_id: str | None = None
    tvdb_id: int | None = None
    wikidata_id: str | None = None
    facebook_id: str | None = None
    instagram_id: str | None = None
    twitter_id: str | None = None


class TMDBMovieDetails(BaseModel):
    """Full TMDB movie record."""

    id: int
    title: str
    overview: str | None = None
    tagline: str | None = None
    runtime: int | None = None
    release_date: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    vote_average: float | None = None
    genres: list[TMDBGenre] = Field(default_factory=list)
    external_ids: TMDBExternalIds | None = None


class TMDBTVDetails(BaseModel):
    """Full TMDB show record."""

    id: int
    name: str
    overview: str | None = None
    first_air_date: str | None = None
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    vote_average: float | None = None
    genres: list[TMDBGenre] = Field(default_factory=list)
    external_ids: TMDBExternalIds | None = None


class TMDBEpisode(BaseModel):
    """Episode inside a TMDB season."""

    id: int
    episode_number: int
    name: str | None = None
    overview: str | None = None
    still_path: str | None = None
    air_date: str | None = None
    runtime: int | None = None


class TMDBSeason(BaseModel):
    """TMDB season with its episodes."""

    id: int
    season_number: int
    name: str | None = None
    overview: str | None = None
    poster_path: str | None = None
    episodes: list[TMDBEpisode] = Field(default_factory=list)


class TMDBCastMember(BaseModel):
    """Cast credit."""

    id: int
    name: str
    character: str | None = None
    profile_path: str | None = None
    order: int | None = None


class TMDBCrewMember(BaseModel):
    """Crew credit."""

    id: int
    name: str
    job: str | None = None
    department: str | None = None
    profile_path: str | None = None


class TMDBCredits(BaseModel):
    """Cast and crew of a title."""

    id: int | None = None
    cast: list[TMDBCastMember] = Field(default_factory=list)
    crew: list[TMDBCrewMember] = Field(default_factory=list)


# --- Trakt ---


class TraktIds(BaseModel):
    """Identifiers Trakt attaches to every title."""

    trakt: int | None = None
    slug: str | None = None
    imdb: str | None = None
    tmdb: int | None = None
    tvdb: int | None = None


class TraktMovie(BaseModel):
    """Trakt movie (extended=full)."""

    title: str
    year: int | None = None
    ids: TraktIds
    tagline: str | None = None
    overview: str | None = None
    released: str | None = None
    runtime: int | None = None
    rating: float | None = None
    votes: int | None = None
    genres: list[str] = Field(default_factory=list)
    certification: str | None = None


class TraktShow(BaseModel):
    """Trakt show (extended=full)."""

    title: str
    year: int | None = None
    ids: TraktIds
    overview: str | None = None
    first_aired: str | None = None
    runtime: int | None = None
    network: str | None = None
    status: str | None = None
    rating: float | None = None
    votes: int | None = None
    genres: list[str] = Field(default_factory=list)


class TraktTrendingMovie(BaseModel):
    """Trending entry: watcher count plus the movie."""

    watchers: int
    movie: TraktMovie


class TraktTrendingShow(BaseModel):
    """Trending entry: watcher count plus the show."""

    watchers: int
    show: TraktShow


class TraktSeason(BaseModel):
    """Season of a Trakt show."""

    number: int
    ids: TraktIds
    title: str | None = None
    overview: str | None = None
    episode_count: int | None = None
    aired_episodes: int | None = None


# --- Plex.tv ---


class PlexGuid(BaseModel):
    """External GUID attached to Plex metadata (``tmdb://123``, ``imdb://tt..``)."""

    id: str


class PlexMediaItem(BaseModel):
    """Plex.tv metadata item."""

    model_config = ConfigDict(populate_by_name=True)

    rating_key: str | None = Field(default=None, alias="ratingKey")
    key: str | None = None
    guid: str | None = None
    type: str | None = None
    title: str
    year: int | None = None
    summary: str | None = None
    thumb: str | None = None
    art: str | None = None
    guids: list[PlexGuid] = Field(default_factory=list, alias="Guid")

    def tmdb_id(self) -> str | None:
        """Return the TMDB ID found among the external GUIDs, if any."""
        for guid in self.guids:
            for prefix in ("tmdb://", "themoviedb://"):
                if guid.id.startswith(prefix):
                    return guid.id.removeprefix(prefix)
        return None


class PlexMediaContainer(BaseModel):
    """Body of every Plex.tv JSON response."""

    model_config = ConfigDict(populate_by_name=True)

    size: int | None = None
    total_size: int | None = Field(default=None, alias="totalSize")
    metadata: list[PlexMediaItem] = Field(default_factory=list, alias="Metadata")


class PlexMediaContainerResponse(BaseModel):
    """Envelope around ``MediaContainer``."""

    model_config = ConfigDict(populate_by_name=True)

    media_container: PlexMediaContainer = Field(alias="MediaContainer")
