"""Response models assembled by ``marketlens.service``."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from marketlens.models.analysis import FibonacciLevels, MovingAverage
from marketlens.models.candle import Candle
from marketlens.models.quote import Quote


class MarketReport(BaseModel):
    """Full analysis for a single symbol."""

    quote: Quote
    candles: list[Candle] = Field(default_factory=list)
    fibonacci: FibonacciLevels
    moving_averages: dict[str, MovingAverage] = Field(default_factory=dict)
    range: str
    interval: str
    updated_at: datetime

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SymbolOverview(Quote):
    """Quote plus Fibonacci context for one watch-list symbol."""

    fibonacci: FibonacciLevels


class MarketOverview(BaseModel):
    """Snapshot of every watch-list symbol that could be fetched."""

    symbols: list[SymbolOverview]
    updated_at: datetime

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
