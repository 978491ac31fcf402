"""Snapshot quote model."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Quote(BaseModel):
    """Represents a snapshot quote for a symbol."""

    symbol: str = Field(..., description="Ticker symbol")
    name: str = Field(..., description="Display name")
    price: float = Field(..., description="Last traded price")
    change: float = Field(..., description="Price change from previous close")
    change_percent: float = Field(..., description="Percentage change")
    high: float = Field(..., description="Day high")
    low: float = Field(..., description="Day low")
    open: float = Field(..., description="Opening price")
    prev_close: float = Field(..., description="Previous close")
    volume: float = Field(0, ge=0, description="Trading volume")
    fifty_two_week_high: float = Field(..., description="52-week high")
    fifty_two_week_low: float = Field(..., description="52-week low")

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
