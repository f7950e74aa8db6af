"""Application settings using pydantic-settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from flixor_core.constants import (
    DEFAULT_CACHE_SUBDIRECTORY,
    DEFAULT_MAX_MEMORY_ENTRIES,
    DEFAULT_SWEEP_INTERVAL_SECONDS,
)


def _default_cache_root() -> Path:
    """Return the per-user cache root (XDG_CACHE_HOME or ~/.cache)."""
    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".cache"


class Settings(BaseSettings):
    """Central configuration for flixor-cache."""

    model_config = SettingsConfigDict(env_prefix="FLIXOR_", env_file=".env")

    # --- Cache ---
    cache_dir: Path = Field(
        default_factory=_default_cache_root,
        description="Root directory holding the persistent cache subdirectory",
    )
    cache_subdirectory: str = Field(
        default=DEFAULT_CACHE_SUBDIRECTORY,
        description="Subdirectory of cache_dir owned by the disk tier",
    )
    max_memory_entries: int = Field(
        default=DEFAULT_MAX_MEMORY_ENTRIES,
        description="Maximum number of entries kept in the memory tier",
    )
    sweep_interval_seconds: float = Field(
        default=DEFAULT_SWEEP_INTERVAL_SECONDS,
        description="Seconds between background sweeps of expired entries",
    )
    disk_pattern_invalidation: bool = Field(
        default=True,
        description="Also remove matching disk records on pattern invalidation",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for collectors",
    )
    cache_log_level: str = Field(
        default="DEBUG",
        description="Minimum level for cache_* events, applied on top of log_level",
    )
    log_quiet_loggers: list[str] = Field(
        default_factory=lambda: ["httpx", "httpcore"],
        description="Loggers held at WARNING or above regardless of log_level",
    )

    # --- TMDB ---
    tmdb_api_key: SecretStr | None = Field(
        default=None,
        description="TMDB v3 API key",
    )
    tmdb_language: str = Field(
        default="en-US",
        description="Language passed to every TMDB request",
    )

    # --- Trakt ---
    trakt_client_id: SecretStr | None = Field(
        default=None,
        description="Trakt application client ID",
    )

    # --- Plex.tv ---
    plex_token: SecretStr | None = Field(
        default=None,
        description="Plex account token",
    )
    plex_client_id: str = Field(
        default="flixor-cache",
        description="Value sent as X-Plex-Client-Identifier",
    )

    # --- HTTP ---
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout per metadata request in seconds",
    )
    http_retry_max: int = Field(
        default=3,
        description="Maximum attempts per metadata request",
    )
    http_retry_wait_min: float = Field(
        default=1.0,
        description="Minimum retry wait in seconds",
    )
    http_retry_wait_max: float = Field(
        default=10.0,
        description="Maximum retry wait in seconds",
    )

    @property
    def disk_cache_path(self) -> Path:
        """Directory owned by the disk tier."""
        return self.cache_dir / self.cache_subdirectory

    @model_validator(mode="after")
    def validate_cache_config(self) -> Settings:
        """Reject cache bounds that would disable the memory tier or the sweep."""
        if self.max_memory_entries < 1:
            msg = "max_memory_entries must be at least 1"
            raise ValueError(msg)
        if self.sweep_interval_seconds <= 0:
            msg = "sweep_interval_seconds must be positive"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_http_config(self) -> Settings:
        """Validate retry configuration."""
        if self.http_retry_max < 1:
            msg = "http_retry_max must be at least 1"
            raise ValueError(msg)
        if self.http_retry_wait_min > self.http_retry_wait_max:
            msg = "http_retry_wait_min must not exceed http_retry_wait_max"
            raise ValueError(msg)
        return self
