"""Mapping of user-facing range/interval pairs onto provider parameters.

Every input resolves to something: unknown ranges fall back to ``3mo`` and
unknown intervals to ``1d``. Intraday intervals are capped at a ``60d``
range because chart providers do not keep fine-grained history longer
than that.
"""

from enum import Enum
from typing import NamedTuple, Optional


class Interval(str, Enum):
    """Candle intervals accepted from callers."""

    M30 = "30m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    W1 = "1w"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Interval":
        """Return the matching interval, or ``1d`` for anything unknown."""
        for member in cls:
            if member.value == value:
                return member
        return cls.D1


class Range(str, Enum):
    """History ranges accepted from callers."""

    D1 = "1d"
    D5 = "5d"
    MO1 = "1mo"
    MO3 = "3mo"
    MO6 = "6mo"
    Y1 = "1y"
    Y3 = "3y"
    Y5 = "5y"
    Y10 = "10y"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Range":
        """Return the matching range, or ``3mo`` for anything unknown."""
        for member in cls:
            if member.value == value:
                return member
        return cls.MO3


DEFAULT_RANGE = Range.MO3
DEFAULT_INTERVAL = Interval.D1

# Provider interval and the number of provider bars merged into one candle
PROVIDER_INTERVALS: dict[Interval, tuple[str, int]] = {
    Interval.M30: ("30m", 1),
    Interval.H1: ("1h", 1),
    Interval.H4: ("1h", 4),
    Interval.D1: ("1d", 1),
    Interval.W1: ("1wk", 1),
}

# Provider intervals whose history is capped at INTRADAY_RANGE_CAP
INTRADAY_INTERVALS = frozenset({"30m", "1h"})
LONG_RANGES = frozenset({Range.MO6, Range.Y1, Range.Y3, Range.Y5, Range.Y10})
INTRADAY_RANGE_CAP = "60d"


class TimeframeResolution(NamedTuple):
    """Provider-facing parameters for one request."""

    range: str
    interval: str
    aggregate: int = 1


def resolve(range_: Optional[str], interval: Optional[str]) -> TimeframeResolution:
    """Resolve a requested range and interval into provider parameters.

    Args:
        range_: Requested history range (e.g. "3mo", "1y").
        interval: Requested candle interval (e.g. "1h", "4h", "1w").

    Returns:
        TimeframeResolution with the provider range, provider interval and
        the bucket size to aggregate provider bars by.
    """
    requested_interval = Interval.parse(interval)
    requested_range = Range.parse(range_)

    provider_interval, aggregate = PROVIDER_INTERVALS[requested_interval]
    provider_range = requested_range.value

    if provider_interval in INTRADAY_INTERVALS and requested_range in LONG_RANGES:
        provider_range = INTRADAY_RANGE_CAP

    return TimeframeResolution(provider_range, provider_interval, aggregate)
