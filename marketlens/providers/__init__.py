"""Market data providers for MarketLens."""

from marketlens.providers.base import BaseProvider, ProviderError, SymbolNotFoundError
from marketlens.providers.yahoo import YahooChartProvider

__all__ = [
    "BaseProvider",
    "ProviderError",
    "SymbolNotFoundError",
    "YahooChartProvider",
]
