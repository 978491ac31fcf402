"""MarketLens - technical analysis of market symbols."""

__version__ = "0.1.0"
