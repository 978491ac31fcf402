"""Tests for the /markets HTTP endpoint."""

import pytest
from fastapi.testclient import TestClient

from marketlens.api import create_app, get_market_service
from marketlens.api.app import get_provider
from marketlens.config import Settings
from marketlens.service import MarketService

from tests.helpers import FakeProvider, bars_from_candles


@pytest.fixture
def provider(swing_candles) -> FakeProvider:
    return FakeProvider(
        bars={"SPY": bars_from_candles(swing_candles)},
        unknown={"NOPE"},
        failing_quotes={"DOWN"},
    )


@pytest.fixture
def client(provider):
    app = create_app(Settings())
    app.dependency_overrides[get_market_service] = lambda: MarketService(
        provider, watchlist=["SPY", "NOPE", "DOWN", "QQQ"]
    )
    return TestClient(app)


class TestSingleSymbol:
    def test_report_shape(self, client):
        response = client.get("/markets", params={"symbol": "SPY", "range": "3mo", "interval": "1d"})

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {
            "quote", "candles", "fibonacci", "movingAverages", "range", "interval", "updatedAt",
        }
        assert body["range"] == "3mo"
        assert body["interval"] == "1d"
        assert body["quote"]["symbol"] == "SPY"
        assert "changePercent" in body["quote"]
        assert "fiftyTwoWeekHigh" in body["quote"]
        assert len(body["candles"]) == 20
        assert set(body["candles"][0]) == {"time", "open", "high", "low", "close", "volume"}

    def test_fibonacci_payload(self, client):
        fib = client.get("/markets", params={"symbol": "SPY"}).json()["fibonacci"]

        assert fib["trend"] == "up"
        assert fib["high"] == 15.0
        assert fib["low"] == 8.0
        assert "swingHighDate" in fib and "swingLowDate" in fib
        assert {"level": "61.8%", "price": 10.67, "percent": 61.8} in fib["retracements"]
        assert len(fib["extensions"]) == 5

    def test_moving_average_payload(self, client):
        averages = client.get("/markets", params={"symbol": "SPY"}).json()["movingAverages"]

        assert set(averages) == {"ma5", "ma20", "ma50", "ma100"}
        assert averages["ma5"]["period"] == 5
        assert averages["ma5"]["series"][:4] == [None, None, None, None]
        assert averages["ma5"]["latest"] is not None
        assert averages["ma50"]["latest"] is None
        assert len(averages["ma100"]["series"]) == 20

    def test_defaults(self, client, provider):
        body = client.get("/markets", params={"symbol": "SPY"}).json()
        assert body["range"] == "3mo"
        assert body["interval"] == "1d"
        assert provider.bar_requests[-1] == ("SPY", "3mo", "1d")

    def test_unknown_symbol_404(self, client):
        response = client.get("/markets", params={"symbol": "NOPE"})
        assert response.status_code == 404
        assert response.json() == {"error": "Symbol not found"}

    def test_provider_failure_500(self, client):
        response = client.get("/markets", params={"symbol": "DOWN"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch market data"}


class TestOverview:
    def test_overview_omits_failed_symbols(self, client):
        response = client.get("/markets")

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"symbols", "updatedAt"}
        assert [s["symbol"] for s in body["symbols"]] == ["SPY", "QQQ"]

    def test_overview_entry_shape(self, client):
        entry = client.get("/markets").json()["symbols"][0]

        assert entry["fibonacci"]["trend"] == "up"
        assert "price" in entry and "prevClose" in entry
        assert "candles" not in entry
        assert "movingAverages" not in entry


def test_unexpected_error_500(provider):
    class BrokenService(MarketService):
        async def get_overview(self):
            raise RuntimeError("boom")

    app = create_app(Settings())
    app.dependency_overrides[get_market_service] = lambda: BrokenService(provider)
    response = TestClient(app).get("/markets")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch market data"}


def test_health():
    response = TestClient(create_app(Settings())).get("/health")
    assert response.json() == {"status": "ok"}


def test_requests_share_one_provider():
    get_provider.cache_clear()
    first = get_market_service()
    second = get_market_service()

    assert first is not second
    assert first.provider is second.provider
