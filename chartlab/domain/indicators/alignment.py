"""Conversion between chart datasets, bars, and timestamp-aligned output."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from chartlab.domain.errors import BarDataError
from chartlab.domain.indicators.base import Indicator, MultiLineIndicator, ParamsInput
from chartlab.domain.models import AlignedPoint, OHLCBar

logger = logging.getLogger(__name__)

# Candlestick point keys: short chart-style names and long names
_CANDLE_KEYS = {
    "open": ("o", "open"),
    "high": ("h", "high"),
    "low": ("l", "low"),
    "close": ("c", "close"),
    "volume": ("v", "volume"),
}


def _first_present(point: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if key in point and point[key] is not None:
            return point[key]
    return None


def _is_candle(point: Any) -> bool:
    return isinstance(point, Mapping) and ("o" in point or "open" in point)


def _to_bar(index: int, point: Any) -> OHLCBar:
    if not isinstance(point, Mapping):
        # Bare number: the index stands in for the timestamp
        return OHLCBar.flat(index, float(point))

    timestamp = _first_present(point, ("x", "timestamp", "t", "date"))
    if timestamp is None:
        timestamp = index

    if _is_candle(point):
        values = {
            name: _first_present(point, keys) for name, keys in _CANDLE_KEYS.items()
        }
        values["volume"] = values["volume"] or 0.0
        return OHLCBar(timestamp=timestamp, **values)

    value = _first_present(point, ("y", "value"))
    if value is None:
        raise ValueError("point has neither OHLC fields nor a y/value field")
    return OHLCBar.flat(timestamp, float(value))


def to_ohlc_bars(dataset: Sequence[Any] | Mapping[str, Any]) -> list[OHLCBar]:
    """Convert a chart dataset into OHLC bars.

    Candlestick points (``o/h/l/c/v`` or ``open/high/low/close/volume``)
    map directly. Value points (``y`` or ``value``) and bare numbers become
    flat bars with open = high = low = close = value and zero volume.

    Args:
        dataset: List of points, or a mapping with the points under ``data``

    Returns:
        One bar per point, in input order

    Raises:
        BarDataError: If a point cannot be read as a bar, or a mapping has
            no list under ``data``

    Example:
        >>> bars = to_ohlc_bars([{"x": 1, "y": 10.0}])
        >>> bars[0].high
        10.0
    """
    if isinstance(dataset, Mapping):
        points = dataset.get("data")
        if not isinstance(points, Sequence) or isinstance(points, str):
            raise BarDataError(
                "Dataset mapping has no 'data' list",
                context={"keys": sorted(str(k) for k in dataset)},
            )
        dataset = points
    if not dataset:
        return []

    bars = []
    for i, point in enumerate(dataset):
        try:
            bars.append(_to_bar(i, point))
        except (ValidationError, ValueError, TypeError) as e:
            raise BarDataError(
                f"Invalid data point at index {i}: {e}",
                context={"index": i},
            ) from e
    return bars


def align_to_timestamps(
    values: Sequence[float | None],
    source_bars: Sequence[OHLCBar],
    offset: int = 0,
) -> list[AlignedPoint]:
    """Pair compact indicator values with their source bar timestamps.

    ``values[i]`` belongs to ``source_bars[i + offset]``. Values that would
    land past the last bar are dropped.

    Example:
        >>> bars = to_ohlc_bars([1.0, 2.0, 3.0])
        >>> align_to_timestamps([1.5, 2.5], bars, offset=1)
        [AlignedPoint(timestamp=1, value=1.5), AlignedPoint(timestamp=2, value=2.5)]
    """
    aligned = []
    for i, value in enumerate(values):
        index = i + offset
        if index >= len(source_bars):
            break
        aligned.append(AlignedPoint(source_bars[index].timestamp, value))
    return aligned


def _drop_none(points: list[AlignedPoint]) -> list[AlignedPoint]:
    return [p for p in points if p.value is not None]


def align_indicator(
    indicator: Indicator,
    bars: Sequence[OHLCBar],
    params: ParamsInput = None,
) -> list[AlignedPoint]:
    """Calculate an indicator's primary line and place it on the bar axis.

    Uses the indicator's own offset, so compact and padded indicators both
    come out positioned correctly. Warm-up entries are omitted.
    """
    config = indicator.resolve_params(params)
    values = indicator.calculate(bars, config)
    return _drop_none(align_to_timestamps(values, bars, indicator.output_offset(config)))


def align_full(
    indicator: MultiLineIndicator,
    bars: Sequence[OHLCBar],
    params: ParamsInput = None,
) -> dict[str, list[AlignedPoint]]:
    """Calculate every line of a multi-line indicator, aligned to the bars."""
    result = indicator.calculate_full(bars, params)
    return {
        name: _drop_none(align_to_timestamps(values, bars))
        for name, values in result.as_dict().items()
    }
