"""Base market data provider interface for MarketLens."""

from abc import ABC, abstractmethod

from marketlens.models import Quote, RawBars


class ProviderError(Exception):
    """Raised when a provider request fails or returns an unusable payload."""


class SymbolNotFoundError(ProviderError):
    """Raised when the provider does not know the requested symbol."""

    def __init__(self, symbol: str):
        super().__init__(f"Symbol not found: {symbol}")
        self.symbol = symbol


class BaseProvider(ABC):
    """Abstract base class for market data providers.

    Providers only fetch and reshape data; candle validation and all
    analytics happen downstream.
    """

    @abstractmethod
    def get_quote(self, symbol: str) -> Quote:
        """Get a snapshot quote for a symbol.

        Args:
            symbol: Ticker symbol.

        Returns:
            Quote with current market data.

        Raises:
            SymbolNotFoundError: If the symbol is unknown.
            ProviderError: If the request fails.
        """
        pass

    @abstractmethod
    def get_bars(self, symbol: str, range_: str, interval: str) -> RawBars:
        """Get historical bars.

        Args:
            symbol: Ticker symbol.
            range_: Provider range (e.g. "3mo", "60d").
            interval: Provider interval (e.g. "1h", "1d", "1wk").

        Returns:
            Raw bars aligned by index.

        Raises:
            SymbolNotFoundError: If the symbol is unknown.
            ProviderError: If the request fails.
        """
        pass
