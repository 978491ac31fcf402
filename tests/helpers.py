"""Candle, quote and provider builders shared by the MarketLens tests."""

from typing import Optional

from marketlens.models import Candle, Quote, RawBars
from marketlens.providers.base import BaseProvider, ProviderError, SymbolNotFoundError

BASE_TIME = 1_700_000_000


def make_candle(index: int, high: float, low: float, volume: float = 1000.0, step: int = 3600) -> Candle:
    """Candle whose open/close sit at the midpoint of its range."""
    mid = (high + low) / 2
    return Candle(
        time=BASE_TIME + index * step,
        open=mid,
        high=high,
        low=low,
        close=mid,
        volume=volume,
    )


def candles_from_closes(closes: list[float]) -> list[Candle]:
    """Flat candles (open == high == low == close) from a close series."""
    return [
        Candle(time=BASE_TIME + i * 86400, open=c, high=c, low=c, close=c, volume=100)
        for i, c in enumerate(closes)
    ]


def make_quote(symbol: str, price: float = 100.0, prev_close: float = 98.0) -> Quote:
    change = price - prev_close
    return Quote(
        symbol=symbol,
        name=symbol,
        price=price,
        change=change,
        change_percent=change / prev_close * 100,
        high=price + 1,
        low=price - 1,
        open=prev_close,
        prev_close=prev_close,
        volume=5000,
        fifty_two_week_high=price + 20,
        fifty_two_week_low=price - 20,
    )


def bars_from_candles(candles: list[Candle]) -> RawBars:
    return RawBars(
        timestamps=[c.time for c in candles],
        open=[c.open for c in candles],
        high=[c.high for c in candles],
        low=[c.low for c in candles],
        close=[c.close for c in candles],
        volume=[c.volume for c in candles],
    )


def tent_candles(peak: int, length: int) -> list[Candle]:
    """Prices rising strictly to ``peak`` then falling strictly after it."""
    candles = []
    for i in range(length):
        level = 100.0 + (i if i <= peak else 2 * peak - i)
        candles.append(make_candle(i, high=level + 1.0, low=level - 1.0))
    return candles


class FakeProvider(BaseProvider):
    """In-memory provider with per-symbol failure injection."""

    def __init__(
        self,
        bars: Optional[dict[str, RawBars]] = None,
        unknown: Optional[set[str]] = None,
        failing_quotes: Optional[set[str]] = None,
        failing_bars: Optional[set[str]] = None,
    ):
        self.bars = bars or {}
        self.unknown = unknown or set()
        self.failing_quotes = failing_quotes or set()
        self.failing_bars = failing_bars or set()
        self.bar_requests: list[tuple[str, str, str]] = []

    def get_quote(self, symbol: str) -> Quote:
        if symbol in self.unknown:
            raise SymbolNotFoundError(symbol)
        if symbol in self.failing_quotes:
            raise ProviderError(f"quote service down for {symbol}")
        return make_quote(symbol)

    def get_bars(self, symbol: str, range_: str, interval: str) -> RawBars:
        self.bar_requests.append((symbol, range_, interval))
        if symbol in self.unknown:
            raise SymbolNotFoundError(symbol)
        if symbol in self.failing_bars:
            raise ProviderError(f"chart service down for {symbol}")
        return self.bars.get(symbol, RawBars())
