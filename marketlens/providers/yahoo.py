"""Yahoo Finance chart API provider.

Chart responses are kept in memory for ``ProviderSettings.cache_ttl``
seconds, keyed on symbol, range and interval, so repeated requests within
that window reuse the previous payload.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional

import requests

from marketlens.config import ProviderSettings
from marketlens.models import Quote, RawBars
from marketlens.providers.base import BaseProvider, ProviderError, SymbolNotFoundError
from marketlens.watchlist import display_name

log = logging.getLogger(__name__)

CHART_PATH = "/v8/finance/chart/{symbol}"

# A short daily window always carries chartPreviousClose in its meta block
QUOTE_RANGE = "5d"
QUOTE_INTERVAL = "1d"


class YahooChartProvider(BaseProvider):
    """Provider backed by the public Yahoo Finance chart endpoint."""

    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the provider.

        Args:
            settings: Connection settings. Defaults to ProviderSettings().
            session: HTTP session to reuse. A new one is created if omitted.
            clock: Time source for cache expiry, in seconds.
        """
        self.settings = settings or ProviderSettings()
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", self.settings.user_agent)
        self._clock = clock
        self._cache: dict[tuple[str, str, str], tuple[float, dict[str, Any]]] = {}
        self._cache_lock = threading.Lock()

    def clear_cache(self) -> None:
        """Drop every cached chart response."""
        with self._cache_lock:
            self._cache.clear()

    def _fetch_chart(self, symbol: str, range_: str, interval: str) -> dict[str, Any]:
        """Fetch the first chart result for a symbol, reusing fresh cache entries."""
        ttl = self.settings.cache_ttl
        key = (symbol, range_, interval)

        if ttl > 0:
            with self._cache_lock:
                cached = self._cache.get(key)
            if cached and cached[0] > self._clock():
                log.debug("Cache hit for %s %s/%s", symbol, range_, interval)
                return cached[1]

        result = self._request_chart(symbol, range_, interval)

        if ttl > 0:
            with self._cache_lock:
                self._cache[key] = (self._clock() + ttl, result)
        return result

    def _request_chart(self, symbol: str, range_: str, interval: str) -> dict[str, Any]:
        url = self.settings.base_url.rstrip("/") + CHART_PATH.format(symbol=symbol)
        params = {"interval": interval, "range": range_}

        try:
            response = self._session.get(url, params=params, timeout=self.settings.timeout)
        except requests.RequestException as e:
            raise ProviderError(f"Request for {symbol} failed: {e}") from e

        if response.status_code == 404:
            raise SymbolNotFoundError(symbol)

        try:
            response.raise_for_status()
            payload = response.json()
        except requests.HTTPError as e:
            raise ProviderError(f"Request for {symbol} failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Invalid JSON for {symbol}: {e}") from e

        chart = payload.get("chart") or {}
        error = chart.get("error")
        if error:
            if error.get("code") == "Not Found":
                raise SymbolNotFoundError(symbol)
            raise ProviderError(f"Chart error for {symbol}: {error.get('description', error)}")

        results = chart.get("result") or []
        if not results:
            raise SymbolNotFoundError(symbol)

        return results[0]

    def get_quote(self, symbol: str) -> Quote:
        """Get a snapshot quote built from the chart meta block."""
        symbol = symbol.upper()
        result = self._fetch_chart(symbol, QUOTE_RANGE, QUOTE_INTERVAL)
        meta = result.get("meta") or {}

        price = _number(meta.get("regularMarketPrice"), 0.0)
        prev_close = _number(
            meta.get("chartPreviousClose"),
            _number(meta.get("previousClose"), price),
        )
        change = price - prev_close
        change_percent = (change / prev_close * 100) if prev_close else 0.0

        return Quote(
            symbol=symbol,
            name=display_name(symbol),
            price=price,
            change=change,
            change_percent=change_percent,
            high=_number(meta.get("regularMarketDayHigh"), price),
            low=_number(meta.get("regularMarketDayLow"), price),
            open=_number(meta.get("regularMarketOpen"), prev_close),
            prev_close=prev_close,
            volume=max(0.0, _number(meta.get("regularMarketVolume"), 0.0)),
            fifty_two_week_high=_number(meta.get("fiftyTwoWeekHigh"), price),
            fifty_two_week_low=_number(meta.get("fiftyTwoWeekLow"), price),
        )

    def get_bars(self, symbol: str, range_: str, interval: str) -> RawBars:
        """Get historical bars for a provider range and interval."""
        symbol = symbol.upper()
        result = self._fetch_chart(symbol, range_, interval)

        timestamps = result.get("timestamp") or []
        quotes = (result.get("indicators") or {}).get("quote") or [{}]
        ohlcv = quotes[0] or {}

        try:
            return RawBars(
                timestamps=timestamps,
                open=ohlcv.get("open") or [],
                high=ohlcv.get("high") or [],
                low=ohlcv.get("low") or [],
                close=ohlcv.get("close") or [],
                volume=ohlcv.get("volume") or [],
            )
        except ValueError as e:
            raise ProviderError(f"Malformed bars for {symbol}: {e}") from e


def _number(value: Any, default: float) -> float:
    """Coerce a payload value to float, using ``default`` when absent."""
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
