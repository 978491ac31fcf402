"""Market data assembly.

Fetches quotes and bars from a provider, runs the analytics in
``marketlens.indicators`` and packages the results. Provider calls are
blocking, so each one runs in a worker thread; symbols are fetched
concurrently and a failure for one symbol never affects another.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from marketlens.indicators import (
    calculate_fibonacci,
    calculate_moving_averages,
    normalize_candles,
)
from marketlens.models import (
    Candle,
    MarketOverview,
    MarketReport,
    SymbolOverview,
)
from marketlens.providers.base import BaseProvider, ProviderError, SymbolNotFoundError
from marketlens.timeframes import Interval, Range, resolve
from marketlens.watchlist import DEFAULT_WATCHLIST

log = logging.getLogger(__name__)

# Overview entries always use daily candles over three months
OVERVIEW_RANGE = "3mo"
OVERVIEW_INTERVAL = "1d"


class MarketService:
    """Builds per-symbol reports and the watch-list overview."""

    def __init__(self, provider: BaseProvider, watchlist: Optional[list[str]] = None):
        """Initialize the service.

        Args:
            provider: Source of quotes and bars.
            watchlist: Symbols for the overview. Defaults to DEFAULT_WATCHLIST.
        """
        self.provider = provider
        self.watchlist = [s.upper() for s in (watchlist or DEFAULT_WATCHLIST)]

    async def fetch_candles(self, symbol: str, range_: str, interval: str) -> list[Candle]:
        """Fetch and normalize candles, returning an empty list on failure."""
        resolution = resolve(range_, interval)

        try:
            bars = await asyncio.to_thread(
                self.provider.get_bars, symbol, resolution.range, resolution.interval
            )
        except ProviderError as e:
            log.warning("Failed to fetch candles for %s: %s", symbol, e)
            return []

        return normalize_candles(bars, interval)

    async def get_symbol_report(
        self,
        symbol: str,
        range_: Optional[str] = None,
        interval: Optional[str] = None,
    ) -> MarketReport:
        """Build the full analysis for one symbol.

        Args:
            symbol: Ticker symbol.
            range_: Requested range; unknown values fall back to 3mo.
            interval: Requested interval; unknown values fall back to 1d.

        Returns:
            MarketReport with quote, candles, Fibonacci levels and
            moving averages.

        Raises:
            SymbolNotFoundError: If the provider does not know the symbol.
            ProviderError: If the quote cannot be fetched.
        """
        symbol = symbol.upper()
        range_value = Range.parse(range_).value
        interval_value = Interval.parse(interval).value

        log.info("Building report for %s (%s/%s)", symbol, range_value, interval_value)

        quote, candles = await asyncio.gather(
            asyncio.to_thread(self.provider.get_quote, symbol),
            self.fetch_candles(symbol, range_value, interval_value),
        )

        averages = calculate_moving_averages(candles)

        return MarketReport(
            quote=quote,
            candles=candles,
            fibonacci=calculate_fibonacci(candles),
            moving_averages={f"ma{period}": ma for period, ma in averages.items()},
            range=range_value,
            interval=interval_value,
            updated_at=datetime.now(timezone.utc),
        )

    async def _overview_entry(self, symbol: str) -> SymbolOverview:
        quote, candles = await asyncio.gather(
            asyncio.to_thread(self.provider.get_quote, symbol),
            self.fetch_candles(symbol, OVERVIEW_RANGE, OVERVIEW_INTERVAL),
        )
        return SymbolOverview(
            **quote.model_dump(),
            fibonacci=calculate_fibonacci(candles),
        )

    async def get_overview(self) -> MarketOverview:
        """Build the overview for every watch-list symbol.

        Symbols whose quote cannot be fetched are left out.
        """
        results = await asyncio.gather(
            *(self._overview_entry(symbol) for symbol in self.watchlist),
            return_exceptions=True,
        )

        entries = []
        for symbol, result in zip(self.watchlist, results):
            if isinstance(result, SymbolNotFoundError):
                log.warning("Skipping unknown symbol %s", symbol)
            elif isinstance(result, Exception):
                log.warning("Skipping %s: %s", symbol, result)
            elif isinstance(result, BaseException):
                raise result
            else:
                entries.append(result)

        log.info("Overview built for %d of %d symbols", len(entries), len(self.watchlist))
        return MarketOverview(symbols=entries, updated_at=datetime.now(timezone.utc))
