"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from flixor_infra.cache.manager import CacheManager
from tests.mocks.mock_factories import FrozenClock, make_cache_manager
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with sensible defaults."""
    return make_settings()


@pytest.fixture
def clock() -> FrozenClock:
    """Return a manually advanced clock."""
    return FrozenClock()


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Return a fresh directory for the disk tier."""
    return tmp_path / "FlixorCache"


@pytest.fixture
async def cache(cache_dir: Path, clock: FrozenClock) -> AsyncGenerator[CacheManager, None]:
    """Return a CacheManager on a temp directory with a frozen clock."""
    manager = make_cache_manager(cache_dir, clock, max_memory_entries=10)
    yield manager
    await manager.stop()


@pytest.fixture
def idle_cache(cache_dir: Path, clock: FrozenClock) -> CacheManager:
    """Return a CacheManager for synchronous tests that never await it."""
    return make_cache_manager(cache_dir, clock)
