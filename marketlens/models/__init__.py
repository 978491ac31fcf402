"""Data models for MarketLens."""

from marketlens.models.analysis import (
    FibonacciLevel,
    FibonacciLevels,
    MovingAverage,
    SwingPoints,
    Trend,
)
from marketlens.models.candle import Candle, RawBars
from marketlens.models.quote import Quote
from marketlens.models.report import MarketOverview, MarketReport, SymbolOverview

__all__ = [
    "Candle",
    "FibonacciLevel",
    "FibonacciLevels",
    "MarketOverview",
    "MarketReport",
    "MovingAverage",
    "Quote",
    "RawBars",
    "SwingPoints",
    "SymbolOverview",
    "Trend",
]
