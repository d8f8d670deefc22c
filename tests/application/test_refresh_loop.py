"""Tests for RefreshLoop use case."""

import logging

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from poolscale.application.dtos.node_group_dtos import RefreshTickReport
from poolscale.application.use_cases.refresh_loop import RefreshLoop
from poolscale.domain.errors import RefreshError


class TestRefreshLoop:
    def _make_provider(self):
        provider = MagicMock()
        provider.name.return_value = "rancher"
        provider.refresh = AsyncMock()
        provider.node_groups.return_value = ["pool-a", "pool-b"]
        provider.generation.return_value = 3
        return provider

    @pytest.mark.asyncio
    async def test_successful_tick(self):
        provider = self._make_provider()
        report = await RefreshLoop(provider).tick()

        provider.refresh.assert_awaited_once()
        assert report == RefreshTickReport(generation=3, succeeded=True, node_group_count=2)

    @pytest.mark.asyncio
    async def test_failed_tick_is_reported_and_logged(self, caplog):
        provider = self._make_provider()
        provider.refresh = AsyncMock(side_effect=RefreshError("backend stalled"))

        with caplog.at_level(logging.ERROR, logger="poolscale"):
            report = await RefreshLoop(provider).tick()

        assert not report.succeeded
        assert report.error == "backend stalled"
        # Last good generation keeps serving
        assert report.generation == 3
        assert report.node_group_count == 2
        assert "Refresh of rancher failed: backend stalled" in caplog.text

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        provider = self._make_provider()
        provider.refresh = AsyncMock(side_effect=RuntimeError("bug"))
        with pytest.raises(RuntimeError):
            await RefreshLoop(provider).tick()

    @pytest.mark.asyncio
    async def test_run_once(self):
        provider = self._make_provider()
        reports = await RefreshLoop(provider).execute(interval_seconds=1, run_once=True)
        assert len(reports) == 1

    @pytest.mark.asyncio
    async def test_max_ticks_sleeps_between_ticks(self):
        provider = self._make_provider()
        with patch(
            "poolscale.application.use_cases.refresh_loop.asyncio.sleep",
            new=AsyncMock(),
        ) as sleep:
            reports = await RefreshLoop(provider).execute(interval_seconds=7, max_ticks=3)

        assert len(reports) == 3
        assert provider.refresh.await_count == 3
        assert sleep.await_count == 2
        sleep.assert_awaited_with(7)

    @pytest.mark.asyncio
    async def test_loop_survives_repeated_failures(self):
        provider = self._make_provider()
        provider.refresh = AsyncMock(
            side_effect=[RefreshError("down"), RefreshError("down"), None]
        )
        with patch(
            "poolscale.application.use_cases.refresh_loop.asyncio.sleep",
            new=AsyncMock(),
        ):
            reports = await RefreshLoop(provider).execute(interval_seconds=1, max_ticks=3)

        assert [r.succeeded for r in reports] == [False, False, True]


class TestRefreshTickReport:
    def test_to_dict(self):
        report = RefreshTickReport(generation=1, succeeded=False, node_group_count=0, error="x")
        assert report.to_dict() == {
            "generation": 1,
            "succeeded": False,
            "node_group_count": 0,
            "error": "x",
        }
