"""HTTP API for MarketLens."""

from marketlens.api.app import create_app, get_market_service

__all__ = ["create_app", "get_market_service"]
