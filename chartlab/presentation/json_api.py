"""
JSON API response types.

Structured, timestamp-aligned indicator output for a charting front end.
Can be used with FastAPI, Flask, or any web framework.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from chartlab.domain.indicators.alignment import align_full, align_indicator
from chartlab.domain.indicators.base import Indicator, MultiLineIndicator, ParamsInput
from chartlab.domain.models import AlignedPoint, IndicatorDescriptor, OHLCBar, Timestamp


# ============================================================================
# Response Models
# ============================================================================

class PointResponse(BaseModel):
    """One chart point."""
    x: Timestamp
    y: float


class LineResponse(BaseModel):
    """One named indicator line."""
    name: str
    points: list[PointResponse]


class IndicatorResponse(BaseModel):
    """API response for a calculated indicator."""
    id: str
    name: str
    category: str
    params: dict[str, Any]
    bar_count: int
    lines: list[LineResponse]
    generated_at: datetime = Field(default_factory=datetime.now)


class IndicatorInfoResponse(BaseModel):
    """API response describing an available indicator."""
    id: str
    name: str
    category: str
    padded: bool
    default_params: dict[str, Any]
    lines: list[str]


# ============================================================================
# Conversion Functions
# ============================================================================

def _points_to_response(
    points: list[AlignedPoint],
    precision: int | None = None,
) -> list[PointResponse]:
    """Convert aligned points, rounding values if a precision is given."""
    return [
        PointResponse(
            x=p.timestamp,
            y=round(p.value, precision) if precision is not None else p.value,
        )
        for p in points
        if p.value is not None
    ]


def build_indicator_response(
    indicator: Indicator,
    bars: Sequence[OHLCBar],
    params: ParamsInput = None,
    full: bool = False,
    precision: int | None = None,
) -> IndicatorResponse:
    """
    Calculate an indicator and shape it for the chart.

    Args:
        indicator: Indicator instance
        bars: Source bars
        params: Parameter overrides
        full: Include every line of a multi-line indicator, not just the
            primary one
        precision: Round values to this many decimals

    Returns:
        Structured API response. With insufficient data every line is empty.
    """
    config = indicator.resolve_params(params)

    if full and isinstance(indicator, MultiLineIndicator):
        aligned = align_full(indicator, bars, config)
    else:
        primary = getattr(indicator, "primary_line", indicator.id)
        aligned = {primary: align_indicator(indicator, bars, config)}

    return IndicatorResponse(
        id=indicator.id,
        name=indicator.name,
        category=indicator.category.value,
        params=config.model_dump(by_alias=True),
        bar_count=len(bars),
        lines=[
            LineResponse(name=name, points=_points_to_response(points, precision))
            for name, points in aligned.items()
        ],
    )


def descriptor_to_response(descriptor: IndicatorDescriptor) -> IndicatorInfoResponse:
    """Convert IndicatorDescriptor to API response."""
    return IndicatorInfoResponse(
        id=descriptor.id,
        name=descriptor.name,
        category=descriptor.category.value,
        padded=descriptor.padded,
        default_params=descriptor.default_params,
        lines=descriptor.lines,
    )


def to_json(response: BaseModel) -> dict[str, Any]:
    """
    Convert a response model to a JSON-serializable dict.

    Args:
        response: Any response model from this module

    Returns:
        JSON-serializable dictionary
    """
    return response.model_dump(mode="json")
