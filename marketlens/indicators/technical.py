"""Technical analysis over candle sequences.

This module turns provider bars into candles and derives the analytics
served by MarketLens: swing points, Fibonacci retracement/extension levels
and simple moving averages. Every function is pure; identical input always
produces identical output.
"""

import logging
import math
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from marketlens.models import (
    Candle,
    FibonacciLevel,
    FibonacciLevels,
    MovingAverage,
    RawBars,
    SwingPoints,
)
from marketlens.timeframes import PROVIDER_INTERVALS, Interval

log = logging.getLogger(__name__)

RETRACEMENT_RATIOS = (0.0, 0.236, 0.382, 0.5, 0.618, 0.786, 1.0)
EXTENSION_RATIOS = (1.272, 1.414, 1.618, 2.0, 2.618)
MOVING_AVERAGE_PERIODS = (5, 20, 50, 100)

# Fewer candles than this yields an empty Fibonacci result
MIN_FIBONACCI_CANDLES = 20

_CENT = Decimal("0.01")


def round_price(value: float) -> float:
    """Round a price to cents, halves away from zero."""
    return float(Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def format_candle_date(timestamp: int) -> str:
    """Format a candle time as a short display date (M/D/YYYY, UTC)."""
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return f"{moment.month}/{moment.day}/{moment.year}"


def normalize_candles(bars: RawBars, interval: str = "1d") -> list[Candle]:
    """Convert provider bars into an ordered list of candles.

    Bars missing any OHLC value or carrying a non-finite one, bars whose high/low do not bound their
    open/close, and bars that do not move forward in time are dropped.
    Intervals the provider cannot serve directly (4h) are built by
    aggregating the finer bars that were fetched instead.

    Args:
        bars: Raw provider bars aligned by index.
        interval: The interval the caller asked for.

    Returns:
        Candles in input order.
    """
    candles: list[Candle] = []
    dropped = 0

    for i, timestamp in enumerate(bars.timestamps):
        open_ = _value_at(bars.open, i)
        high = _value_at(bars.high, i)
        low = _value_at(bars.low, i)
        close = _value_at(bars.close, i)

        prices = (open_, high, low, close)
        if any(p is None or not math.isfinite(p) for p in prices):
            dropped += 1
            continue
        if high < max(open_, close) or low > min(open_, close):
            dropped += 1
            continue
        if candles and timestamp <= candles[-1].time:
            dropped += 1
            continue

        volume = _value_at(bars.volume, i)
        if volume is None or not math.isfinite(volume):
            volume = 0.0
        candles.append(Candle(
            time=int(timestamp),
            open=open_,
            high=high,
            low=low,
            close=close,
            volume=max(0.0, volume),
        ))

    if dropped:
        log.debug("Dropped %d malformed bars out of %d", dropped, len(bars.timestamps))

    _, aggregate = PROVIDER_INTERVALS[Interval.parse(interval)]
    if aggregate > 1:
        return aggregate_candles(candles, aggregate)
    return candles


def _value_at(values: list[Optional[float]], index: int) -> Optional[float]:
    if index >= len(values):
        return None
    return values[index]


def aggregate_candles(candles: list[Candle], factor: int) -> list[Candle]:
    """Merge consecutive chunks of ``factor`` candles into one candle each.

    The trailing chunk is kept even when it holds fewer than ``factor``
    candles.
    """
    if factor < 1:
        raise ValueError(f"Aggregation factor must be positive, got {factor}")

    aggregated = []
    for start in range(0, len(candles), factor):
        chunk = candles[start:start + factor]
        aggregated.append(Candle(
            time=chunk[0].time,
            open=chunk[0].open,
            high=max(c.high for c in chunk),
            low=min(c.low for c in chunk),
            close=chunk[-1].close,
            volume=sum(c.volume for c in chunk),
        ))
    return aggregated


def swing_lookback(candle_count: int) -> int:
    """Lookback window used for a series of ``candle_count`` candles."""
    return max(2, min(5, candle_count // 10))


def find_swing_points(candles: list[Candle], lookback: int = 5) -> SwingPoints:
    """Find swing highs and swing lows.

    A candle is a swing high when its high is strictly greater than the
    highs of the ``lookback`` candles on each side of it; a swing low is
    the mirror image on lows. Equal neighbours disqualify a candle. Only
    candles with a full window on both sides are considered.

    Args:
        candles: Candle sequence.
        lookback: Number of neighbours examined on each side.

    Returns:
        SwingPoints with ascending index lists.
    """
    highs = []
    lows = []

    for i in range(lookback, len(candles) - lookback):
        neighbours = candles[i - lookback:i] + candles[i + 1:i + lookback + 1]
        current = candles[i]

        if all(current.high > n.high for n in neighbours):
            highs.append(i)
        if all(current.low < n.low for n in neighbours):
            lows.append(i)

    return SwingPoints(highs=highs, lows=lows)


def _fib_level(ratio: float, price: float) -> FibonacciLevel:
    return FibonacciLevel(
        level=f"{ratio * 100:.1f}%",
        price=round_price(price),
        percent=round(ratio * 100, 1),
    )


def calculate_fibonacci_levels(high_price: float, low_price: float) -> list[FibonacciLevel]:
    """Calculate Fibonacci retracement levels.

    Retracements are measured down from the high, so the 0% level is the
    high and the 100% level is the low.

    Args:
        high_price: Swing high price
        low_price: Swing low price

    Returns:
        Levels for 0%, 23.6%, 38.2%, 50%, 61.8%, 78.6% and 100%.
    """
    diff = high_price - low_price
    levels = []

    for ratio in RETRACEMENT_RATIOS:
        if ratio == 0.0:
            price = high_price
        elif ratio == 1.0:
            price = low_price
        else:
            price = high_price - diff * ratio
        levels.append(_fib_level(ratio, price))

    return levels


def calculate_fibonacci_extensions(high_price: float, low_price: float) -> list[FibonacciLevel]:
    """Calculate Fibonacci extension levels projected up from the low.

    Args:
        high_price: Swing high price
        low_price: Swing low price

    Returns:
        Levels for 127.2%, 141.4%, 161.8%, 200% and 261.8%.
    """
    diff = high_price - low_price
    return [_fib_level(ratio, low_price + diff * ratio) for ratio in EXTENSION_RATIOS]


def calculate_fibonacci(candles: list[Candle]) -> FibonacciLevels:
    """Anchor a trend on recent swing points and compute its Fibonacci levels.

    The most recent swing point decides the trend. When it is a swing high
    the leg runs from the last swing low before it (up trend); otherwise it
    runs from the last swing high before the latest swing low (down trend).
    A missing counterpart falls back to the first candle. When the series
    has no swing highs or no swing lows at all, the overall high and low
    are used instead.

    Args:
        candles: Candle sequence, oldest first.

    Returns:
        FibonacciLevels; an empty result when fewer than 20 candles.
    """
    if len(candles) < MIN_FIBONACCI_CANDLES:
        return FibonacciLevels()

    swings = find_swing_points(candles, swing_lookback(len(candles)))

    if not swings.highs or not swings.lows:
        high_idx = max(range(len(candles)), key=lambda i: candles[i].high)
        low_idx = min(range(len(candles)), key=lambda i: candles[i].low)
        trend = "up"
    else:
        last_high = swings.highs[-1]
        last_low = swings.lows[-1]

        if last_high > last_low:
            trend = "up"
            high_idx = last_high
            low_idx = _last_before(swings.lows, last_high)
        else:
            trend = "down"
            low_idx = last_low
            high_idx = _last_before(swings.highs, last_low)

    high = candles[high_idx].high
    low = candles[low_idx].low

    return FibonacciLevels(
        high=high,
        low=low,
        trend=trend,
        retracements=calculate_fibonacci_levels(high, low),
        extensions=calculate_fibonacci_extensions(high, low),
        swing_high_date=format_candle_date(candles[high_idx].time),
        swing_low_date=format_candle_date(candles[low_idx].time),
    )


def _last_before(indices: list[int], limit: int) -> int:
    """Last index in ``indices`` strictly below ``limit``, else 0."""
    earlier = [i for i in indices if i < limit]
    return earlier[-1] if earlier else 0


def calculate_sma(prices: list[float], period: int) -> list[Optional[float]]:
    """Calculate Simple Moving Average.

    Args:
        prices: List of price values (typically close prices)
        period: Number of periods for the moving average

    Returns:
        One value per price. The first (period-1) values are None.
    """
    if period < 1:
        raise ValueError(f"Period must be positive, got {period}")

    result: list[Optional[float]] = [None] * min(period - 1, len(prices))

    for i in range(period - 1, len(prices)):
        window = prices[i - period + 1:i + 1]
        result.append(sum(window) / period)

    return result


def calculate_moving_averages(
    candles: list[Candle],
    periods: Iterable[int] = MOVING_AVERAGE_PERIODS,
) -> dict[int, MovingAverage]:
    """Calculate simple moving averages of closes for each period.

    Args:
        candles: Candle sequence, oldest first.
        periods: Window sizes to compute.

    Returns:
        Mapping of period to MovingAverage. ``latest`` is None when the
        series is shorter than the period.
    """
    closes = [c.close for c in candles]
    averages = {}

    for period in periods:
        series = calculate_sma(closes, period)
        averages[period] = MovingAverage(
            period=period,
            latest=series[-1] if series else None,
            series=series,
        )

    return averages
