"""Result models produced by the analytics in ``marketlens.indicators``."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Trend = Literal["up", "down"]

_RESULT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class SwingPoints(BaseModel):
    """Indices of swing highs and swing lows within one candle sequence."""

    highs: list[int] = Field(default_factory=list)
    lows: list[int] = Field(default_factory=list)

    model_config = _RESULT_CONFIG


class FibonacciLevel(BaseModel):
    """A single retracement or extension level."""

    level: str = Field(..., description="Ratio label, e.g. '61.8%'")
    price: float = Field(..., description="Level price rounded to cents")
    percent: float = Field(..., description="Ratio expressed as a percentage")

    model_config = _RESULT_CONFIG


class FibonacciLevels(BaseModel):
    """Fibonacci retracements and extensions anchored on one trend leg."""

    high: float = 0.0
    low: float = 0.0
    trend: Trend = "up"
    retracements: list[FibonacciLevel] = Field(default_factory=list)
    extensions: list[FibonacciLevel] = Field(default_factory=list)
    swing_high_date: Optional[str] = None
    swing_low_date: Optional[str] = None

    model_config = _RESULT_CONFIG


class MovingAverage(BaseModel):
    """Simple moving average over closes for one window size."""

    period: int = Field(..., ge=1)
    latest: Optional[float] = None
    series: list[Optional[float]] = Field(default_factory=list)

    model_config = _RESULT_CONFIG
