"""FastAPI application exposing market analysis endpoints."""

import logging
from functools import lru_cache
from typing import Optional, Union

from fastapi import Depends, FastAPI, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketlens.config import Settings, get_settings
from marketlens.logging_config import configure_logging
from marketlens.models import MarketOverview, MarketReport
from marketlens.providers import ProviderError, SymbolNotFoundError, YahooChartProvider
from marketlens.service import MarketService
from marketlens.timeframes import DEFAULT_INTERVAL, DEFAULT_RANGE

log = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_provider() -> YahooChartProvider:
    """Provider shared by every request."""
    return YahooChartProvider(get_settings().provider)


def get_market_service() -> MarketService:
    """Build the service used by request handlers."""
    settings = get_settings()
    return MarketService(
        get_provider(),
        watchlist=settings.markets.watchlist,
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the API application.

    Args:
        settings: Configuration to use. Defaults to the loaded settings.
    """
    configure_logging()
    settings = settings or get_settings()

    app = FastAPI(
        title="MarketLens API",
        description="Quotes with Fibonacci levels and moving averages.",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["Health"])
    async def health() -> dict:
        return {"status": "ok"}

    @app.get(
        "/markets",
        response_model=Union[MarketReport, MarketOverview],
        tags=["Markets"],
    )
    async def read_markets(
        symbol: Optional[str] = Query(default=None),
        range_: str = Query(default=DEFAULT_RANGE.value, alias="range"),
        interval: str = Query(default=DEFAULT_INTERVAL.value),
        service: MarketService = Depends(get_market_service),
    ):
        try:
            if symbol:
                log.info("Handling /markets request for %s", symbol)
                return await service.get_symbol_report(symbol, range_, interval)

            log.info("Handling /markets overview request")
            return await service.get_overview()
        except SymbolNotFoundError:
            return _error(status.HTTP_404_NOT_FOUND, "Symbol not found")
        except ProviderError as e:
            log.error("Markets API provider failure: %s", e)
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch market data")
        except Exception:
            log.exception("Markets API error")
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch market data")

    return app
