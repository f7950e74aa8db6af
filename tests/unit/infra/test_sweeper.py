"""Tests for PeriodicSweeper."""

from __future__ import annotations

import asyncio

import pytest

from flixor_infra.cache.sweeper import PeriodicSweeper


@pytest.mark.unit
class TestPeriodicSweeper:
    """Test the background sweep loop."""

    def test_rejects_non_positive_interval(self) -> None:
        """The interval must be positive."""

        async def _noop() -> None:
            return None

        with pytest.raises(ValueError, match="interval_seconds"):
            PeriodicSweeper(_noop, 0)

    @pytest.mark.asyncio
    async def test_runs_periodically(self) -> None:
        """The callback fires repeatedly until stopped."""
        calls = 0

        async def _sweep() -> None:
            nonlocal calls
            calls += 1

        sweeper = PeriodicSweeper(_sweep, 0.01)
        sweeper.start()
        assert sweeper.running
        await asyncio.sleep(0.1)
        await sweeper.stop()

        assert calls >= 2
        assert not sweeper.running

    @pytest.mark.asyncio
    async def test_stop_before_first_tick(self) -> None:
        """Stopping promptly means the callback never runs."""
        calls = 0

        async def _sweep() -> None:
            nonlocal calls
            calls += 1

        sweeper = PeriodicSweeper(_sweep, 60)
        sweeper.start()
        await sweeper.stop()
        assert calls == 0

    @pytest.mark.asyncio
    async def test_failures_do_not_stop_schedule(self) -> None:
        """A raising pass is logged and the next one still runs."""
        calls = 0

        async def _sweep() -> None:
            nonlocal calls
            calls += 1
            raise RuntimeError("boom")

        sweeper = PeriodicSweeper(_sweep, 0.01)
        sweeper.start()
        await asyncio.sleep(0.1)
        await sweeper.stop()
        assert calls >= 2

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self) -> None:
        """Stop without start, or twice, is harmless."""

        async def _noop() -> None:
            return None

        sweeper = PeriodicSweeper(_noop, 1)
        await sweeper.stop()
        sweeper.start()
        sweeper.start()
        await sweeper.stop()
        await sweeper.stop()
        assert not sweeper.running
