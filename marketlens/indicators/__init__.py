"""Technical indicators module."""

from marketlens.indicators.technical import (
    aggregate_candles,
    calculate_fibonacci,
    calculate_fibonacci_extensions,
    calculate_fibonacci_levels,
    calculate_moving_averages,
    calculate_sma,
    find_swing_points,
    normalize_candles,
    round_price,
    swing_lookback,
)

__all__ = [
    "aggregate_candles",
    "calculate_fibonacci",
    "calculate_fibonacci_extensions",
    "calculate_fibonacci_levels",
    "calculate_moving_averages",
    "calculate_sma",
    "find_swing_points",
    "normalize_candles",
    "round_price",
    "swing_lookback",
]
