"""Shared fixtures for MarketLens tests."""

import pytest

from marketlens.models import Candle

from tests.helpers import FakeProvider, make_candle


@pytest.fixture
def swing_candles() -> list[Candle]:
    """Twenty candles with one clean swing: low 8 at index 2, high 15 at index 14."""
    lows = [9.0, 8.5, 8.0, 8.5, 9.0, 9.5, 10.0, 10.5, 11.0, 11.5,
            12.0, 12.5, 13.0, 13.5, 14.0, 13.5, 13.0, 12.5, 12.0, 11.5]
    return [make_candle(i, high=low + 1.0, low=low) for i, low in enumerate(lows)]


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()
