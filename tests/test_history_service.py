"""Tests for point and multi-year CDL history queries."""

from __future__ import annotations

import asyncio
from contextlib import aclosing

import httpx
import pytest

from cdlhistory.core.types import CropType
from cdlhistory.cropscape.client import NO_DATA_RESULT
from cdlhistory.cropscape.service import (
    iter_cdl_history,
    query_cdl_history,
    query_cdl_point,
)

LAT, LNG = 40.0, -90.0


class FakeSource:
    """Scripted source: per-year payload string or exception to raise."""

    def __init__(
        self,
        payloads: dict[int, str | Exception] | None = None,
        delay: float = 0.0,
        delays: dict[int, float] | None = None,
    ) -> None:
        self._payloads = payloads or {}
        self._delay = delay
        self._delays = delays or {}
        self.calls: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch_value(self, lat: float, lng: float, year: int) -> str:
        self.calls.append(year)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delays.get(year, self._delay))
            item = self._payloads.get(year, NO_DATA_RESULT)
            if isinstance(item, Exception):
                raise item
            return item
        finally:
            self.in_flight -= 1


# ---------------------------------------------------------------------------
# query_cdl_point
# ---------------------------------------------------------------------------


class TestQueryCDLPoint:
    @pytest.mark.asyncio
    async def test_enriches_known_code(self):
        source = FakeSource({2020: "<Result>1</Result>"})
        record = await query_cdl_point(LAT, LNG, 2020, source=source)

        assert record is not None
        assert record.year == 2020
        assert record.crop_code == 1
        assert record.crop_name == "Corn"
        assert record.color == "#ffd300"
        assert record.crop_type == CropType.ANNUAL
        assert record.confidence == 90
        assert record.transition_warning is None

    @pytest.mark.asyncio
    async def test_inline_confidence_wins(self):
        source = FakeSource({2020: "<Result>{value: 1, confidence: 42.6}</Result>"})
        record = await query_cdl_point(LAT, LNG, 2020, source=source)
        assert record.confidence == 43

    @pytest.mark.asyncio
    async def test_unknown_code_falls_back(self):
        source = FakeSource({2020: "<Result>199</Result>"})
        record = await query_cdl_point(LAT, LNG, 2020, source=source)
        assert record.crop_name == "Unknown (199)"
        assert record.crop_type == CropType.OTHER
        assert record.confidence == 65

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", ["<Result>0</Result>", "<Result>81</Result>"])
    async def test_no_data_codes_are_absent(self, payload):
        source = FakeSource({2020: payload})
        assert await query_cdl_point(LAT, LNG, 2020, source=source) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure",
        [
            httpx.ReadTimeout("timed out"),
            httpx.ConnectError("refused"),
            httpx.HTTPStatusError(
                "Server error 502",
                request=httpx.Request("GET", "http://cdl.test"),
                response=httpx.Response(502),
            ),
        ],
    )
    async def test_http_failures_return_none(self, failure):
        source = FakeSource({2020: failure})
        assert await query_cdl_point(LAT, LNG, 2020, source=source) is None

    @pytest.mark.asyncio
    async def test_malformed_payload_returns_none(self):
        source = FakeSource({2020: "<html>Bad Gateway</html>"})
        assert await query_cdl_point(LAT, LNG, 2020, source=source) is None

    @pytest.mark.asyncio
    async def test_slow_source_times_out(self):
        source = FakeSource({2020: "<Result>1</Result>"}, delay=1.0)
        assert await query_cdl_point(LAT, LNG, 2020, source=source, timeout=0.01) is None


# ---------------------------------------------------------------------------
# query_cdl_history
# ---------------------------------------------------------------------------


class TestQueryCDLHistory:
    @pytest.mark.asyncio
    async def test_permanent_crop_appearance_and_removal(self):
        source = FakeSource(
            {
                2020: "<Result>1</Result>",
                2021: "<Result>1</Result>",
                2022: "<Result>75</Result>",
                2023: "<Result>1</Result>",
            }
        )
        history = await query_cdl_history(
            LAT, LNG, years=[2023, 2022, 2021, 2020], source=source, newest_first=False
        )
        by_year = {r.year: r for r in history}

        assert [r.year for r in history] == [2020, 2021, 2022, 2023]
        assert by_year[2020].transition_warning is None
        assert by_year[2021].transition_warning is None

        establishment = by_year[2022].transition_warning
        removal = by_year[2023].transition_warning
        assert establishment.startswith("Almonds typically requires 3-7 years to establish")
        assert "(78% confidence)" in establishment
        assert removal.startswith("Unlikely transition from established Almonds to Corn")
        assert "(90% confidence)" in removal
        assert establishment != removal

        # The isolated-year finding for 2022 is kept alongside the transition one.
        assert len(by_year[2022].warnings) == 2
        assert by_year[2022].warnings[0].startswith("Single year of Almonds")
        assert by_year[2023].warnings == (removal,)

    @pytest.mark.asyncio
    async def test_every_year_timing_out_gives_empty_history(self):
        years = list(range(2023, 2007, -1))
        source = FakeSource({year: httpx.ReadTimeout("timed out") for year in years})
        history = await query_cdl_history(LAT, LNG, years=years, source=source)

        assert history == []
        assert source.calls == years

    @pytest.mark.asyncio
    async def test_failed_years_are_skipped_not_fatal(self):
        source = FakeSource(
            {
                2023: "<Result>5</Result>",
                2022: httpx.ConnectError("refused"),
                2021: "garbage",
                2020: "<Result>1</Result>",
            }
        )
        history = await query_cdl_history(LAT, LNG, years=[2023, 2022, 2021, 2020], source=source)
        assert [r.year for r in history] == [2020, 2023]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failure", [ConnectionResetError("reset"), RuntimeError("boom")])
    async def test_unexpected_source_errors_skip_the_year(self, failure):
        source = FakeSource(
            {
                2023: "<Result>1</Result>",
                2022: failure,
                2021: "<Result>1</Result>",
            }
        )
        history = await query_cdl_history(LAT, LNG, years=[2023, 2022, 2021], source=source)
        assert [r.year for r in history] == [2021, 2023]
        assert source.calls == [2023, 2022, 2021]

    @pytest.mark.asyncio
    async def test_no_data_years_never_appear(self):
        source = FakeSource(
            {
                2021: "<Result>81</Result>",
                2020: "<Result>0</Result>",
                2019: "<Result>24</Result>",
            }
        )
        history = await query_cdl_history(LAT, LNG, years=[2021, 2020, 2019], source=source)
        assert [r.crop_code for r in history] == [24]

    @pytest.mark.asyncio
    async def test_newest_first_only_changes_presentation(self):
        payloads = {
            2020: "<Result>1</Result>",
            2021: "<Result>75</Result>",
            2022: "<Result>1</Result>",
        }
        ascending = await query_cdl_history(
            LAT, LNG, years=[2022, 2021, 2020], source=FakeSource(payloads), newest_first=False
        )
        descending = await query_cdl_history(
            LAT, LNG, years=[2022, 2021, 2020], source=FakeSource(payloads), newest_first=True
        )
        assert [r.year for r in descending] == [2022, 2021, 2020]
        assert list(reversed(descending)) == ascending

    @pytest.mark.asyncio
    async def test_queries_are_sequential(self):
        years = [2023, 2022, 2021, 2020]
        source = FakeSource({year: "<Result>1</Result>" for year in years}, delay=0.01)
        await query_cdl_history(LAT, LNG, years=years, source=source)

        assert source.max_in_flight == 1
        assert source.calls == years

    @pytest.mark.asyncio
    async def test_low_confidence_year_flagged(self):
        source = FakeSource({2020: "<Result>{value: 5, confidence: 40}</Result>"})
        history = await query_cdl_history(LAT, LNG, years=[2020], source=source)
        assert history[0].transition_warning == "Low confidence (40%) for Soybeans classification."

    @pytest.mark.asyncio
    async def test_cancelled_scan_returns_completed_years(self):
        source = FakeSource(
            {
                2023: "<Result>1</Result>",
                2022: "<Result>75</Result>",
                2021: "<Result>1</Result>",
            },
            delays={2021: 10.0},
        )
        task = asyncio.create_task(
            query_cdl_history(LAT, LNG, years=[2023, 2022, 2021], source=source, timeout=30.0)
        )
        await asyncio.sleep(0.1)
        task.cancel()
        history = await task

        assert not task.cancelled()
        assert [r.year for r in history] == [2022, 2023]
        assert history[1].transition_warning.startswith("Unlikely transition from established Almonds")
        assert source.calls == [2023, 2022, 2021]


class TestIterCDLHistory:
    @pytest.mark.asyncio
    async def test_stopping_early_keeps_partial_results(self):
        years = [2023, 2022, 2021]
        source = FakeSource({year: "<Result>1</Result>" for year in years})

        received = []
        async with aclosing(iter_cdl_history(LAT, LNG, years, source=source)) as stream:
            async for record in stream:
                received.append(record)
                break

        assert [r.year for r in received] == [2023]
        assert source.calls == [2023]


class TestMockSource:
    @pytest.mark.asyncio
    async def test_default_source_from_environment(self, monkeypatch):
        monkeypatch.setenv("CDLHISTORY_CROPSCAPE_PROVIDER", "mock")
        history = await query_cdl_history(37.5585, -120.9977, newest_first=False)

        assert [r.year for r in history] == [2018, 2019, 2020, 2021, 2022]
        by_year = {r.year: r for r in history}
        assert by_year[2021].crop_name == "Almonds"
        assert len(by_year[2021].warnings) == 2
        assert by_year[2022].transition_warning.startswith("Unlikely transition from established Almonds")
        assert by_year[2020].transition_warning is None

    @pytest.mark.asyncio
    async def test_rotation_point_has_no_warnings(self, mock_source):
        history = await query_cdl_history(42.0308, -93.6319, source=mock_source)

        assert len(history) == 16
        assert all(r.transition_warning is None for r in history)
        assert len(mock_source.calls) == 16

    @pytest.mark.asyncio
    async def test_outside_coverage_is_empty(self, mock_source):
        assert await query_cdl_history(26.0, -90.0, source=mock_source) == []

    @pytest.mark.asyncio
    async def test_configured_year_window_applies_to_default_source(self, monkeypatch):
        monkeypatch.setenv("CDLHISTORY_CROPSCAPE_PROVIDER", "mock")
        monkeypatch.setenv("CDLHISTORY_HISTORY_START_YEAR", "2020")
        monkeypatch.setenv("CDLHISTORY_HISTORY_NEWEST_FIRST", "true")
        history = await query_cdl_history(42.0308, -93.6319)

        assert [r.year for r in history] == [2023, 2022, 2021, 2020]
