"""
Domain models - pure data structures with validation.

Bars are immutable and self-validating. Indicator output is plain lists so
the numeric code stays cheap; these models only describe the inputs and the
shape of what a chart needs to render.
"""

from datetime import datetime
from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, Field, model_validator


# ============================================================================
# Enums
# ============================================================================

class PriceSource(str, Enum):
    """Which price series an indicator reads from a bar sequence."""
    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    VOLUME = "volume"
    # Derived series
    HLC3 = "hlc3"
    OHLC4 = "ohlc4"
    TYPICAL = "typical"


class IndicatorCategory(str, Enum):
    """Where an indicator is plotted."""
    OVERLAY = "overlay"        # same axis as price
    OSCILLATOR = "oscillator"  # separate panel


Timestamp = int | float | datetime


# ============================================================================
# Domain Models
# ============================================================================

class OHLCBar(BaseModel):
    """
    One time-bucketed price observation.

    Sequences of bars are expected in ascending timestamp order. Nothing in
    chartlab sorts or de-duplicates them.
    """
    model_config = {"frozen": True, "extra": "forbid"}

    timestamp: Timestamp = Field(description="Bar open time (epoch number or datetime)")
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def _validate_range(self) -> "OHLCBar":
        """Open and close must sit inside the high/low range."""
        if self.low > self.high:
            raise ValueError("low must not exceed high")
        if min(self.open, self.close) < self.low:
            raise ValueError("open and close must be >= low")
        if max(self.open, self.close) > self.high:
            raise ValueError("open and close must be <= high")
        return self

    @classmethod
    def flat(cls, timestamp: Timestamp, value: float) -> "OHLCBar":
        """Degenerate bar for a plain value series (open=high=low=close)."""
        return cls(timestamp=timestamp, open=value, high=value, low=value, close=value)


class AlignedPoint(NamedTuple):
    """An indicator value placed on the source timestamp axis."""
    timestamp: Timestamp
    value: float | None


class IndicatorDescriptor(BaseModel):
    """Static description of an indicator kind."""
    model_config = {"frozen": True}

    id: str
    name: str
    category: IndicatorCategory
    default_params: dict[str, Any]
    padded: bool = Field(description="True if output is full-length and null-padded")
    lines: list[str] = Field(default_factory=list, description="Named output lines")
