"""Candle (OHLCV) data models."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class Candle(BaseModel):
    """Represents a single OHLCV candle."""

    time: int = Field(..., description="Bucket start, seconds since epoch")
    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Closing price")
    volume: float = Field(0, ge=0, description="Trading volume")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_range(self) -> "Candle":
        if self.high < max(self.open, self.close) or self.low > min(self.open, self.close):
            raise ValueError("high/low do not bound open and close")
        return self


class RawBars(BaseModel):
    """Historical bars as returned by a provider, aligned by index.

    Any price or volume entry may be missing; the normalizer decides
    what to keep.
    """

    timestamps: list[int] = Field(default_factory=list)
    open: list[Optional[float]] = Field(default_factory=list)
    high: list[Optional[float]] = Field(default_factory=list)
    low: list[Optional[float]] = Field(default_factory=list)
    close: list[Optional[float]] = Field(default_factory=list)
    volume: list[Optional[float]] = Field(default_factory=list)

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.timestamps)
