"""Tests for range/interval resolution.

**Feature: market-analysis**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from marketlens.timeframes import (
    INTRADAY_RANGE_CAP,
    Interval,
    Range,
    TimeframeResolution,
    resolve,
)


class TestIntervalMapping:
    """Requested intervals map onto provider intervals."""

    @pytest.mark.parametrize(
        "interval, expected",
        [
            ("30m", ("30m", 1)),
            ("1h", ("1h", 1)),
            ("4h", ("1h", 4)),
            ("1d", ("1d", 1)),
            ("1w", ("1wk", 1)),
        ],
    )
    def test_known_intervals(self, interval: str, expected: tuple[str, int]):
        resolution = resolve("3mo", interval)
        assert (resolution.interval, resolution.aggregate) == expected

    @pytest.mark.parametrize("interval", ["5m", "1wk", "", "1D", None])
    def test_unknown_interval_defaults_to_daily(self, interval):
        resolution = resolve("3mo", interval)
        assert resolution.interval == "1d"
        assert resolution.aggregate == 1

    def test_parse_is_total(self):
        assert Interval.parse("4h") is Interval.H4
        assert Interval.parse("bogus") is Interval.D1


class TestRangeMapping:
    """Requested ranges pass through or fall back to 3mo."""

    @pytest.mark.parametrize("range_", ["1d", "5d", "1mo", "3mo", "6mo", "1y", "3y", "5y", "10y"])
    def test_known_ranges_pass_through_for_daily(self, range_: str):
        assert resolve(range_, "1d").range == range_

    @pytest.mark.parametrize("range_", ["2y", "60d", "max", "", None])
    def test_unknown_range_defaults(self, range_):
        assert resolve(range_, "1d").range == "3mo"

    def test_parse_is_total(self):
        assert Range.parse("10y") is Range.Y10
        assert Range.parse("2y") is Range.MO3


class TestIntradayCap:
    """
    **Feature: market-analysis, Property: Intraday Range Cap**

    Fine-grained intervals never request more than 60 days of history.
    """

    def test_one_year_hourly(self):
        assert resolve("1y", "1h") == TimeframeResolution("60d", "1h", 1)

    @pytest.mark.parametrize("range_", ["6mo", "1y", "3y", "5y", "10y"])
    @pytest.mark.parametrize("interval", ["30m", "1h"])
    def test_long_ranges_capped(self, range_: str, interval: str):
        assert resolve(range_, interval).range == INTRADAY_RANGE_CAP

    @pytest.mark.parametrize("range_", ["1d", "5d", "1mo", "3mo"])
    def test_short_ranges_not_capped(self, range_: str):
        assert resolve(range_, "30m").range == range_

    def test_one_year_four_hour(self):
        assert resolve("1y", "4h") == TimeframeResolution("60d", "1h", 4)

    @pytest.mark.parametrize("range_", ["6mo", "1y", "3y", "5y", "10y"])
    def test_four_hour_capped_through_hourly_bars(self, range_: str):
        assert resolve(range_, "4h") == TimeframeResolution(INTRADAY_RANGE_CAP, "1h", 4)

    def test_four_hour_short_range_not_capped(self):
        assert resolve("1mo", "4h") == TimeframeResolution("1mo", "1h", 4)

    def test_unknown_range_with_hourly_uses_default(self):
        assert resolve("2y", "1h").range == "3mo"

    @given(
        range_=st.text(max_size=5),
        interval=st.text(max_size=5),
    )
    @settings(max_examples=100)
    def test_every_input_resolves(self, range_: str, interval: str):
        resolution = resolve(range_, interval)
        assert resolution.interval in {"30m", "1h", "1d", "1wk"}
        assert resolution.range in {r.value for r in Range} | {INTRADAY_RANGE_CAP}
