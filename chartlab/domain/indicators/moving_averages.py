"""Moving average indicators."""

from collections.abc import Sequence

from pydantic import Field

from chartlab.domain.indicators.base import (
    Indicator,
    ParamsInput,
    Series,
    SourceParams,
)
from chartlab.domain.indicators.prices import extract_prices
from chartlab.domain.models import IndicatorCategory, OHLCBar


def rolling_mean(values: Sequence[float], period: int) -> list[float]:
    """Calculate the trailing mean of every full window.

    Args:
        values: Values to average
        period: Window length

    Returns:
        Compact list of ``len(values) - period + 1`` means, empty if
        there are fewer than ``period`` values

    Example:
        >>> rolling_mean([10, 11, 12, 13, 14, 15], 3)
        [11.0, 12.0, 13.0, 14.0]
    """
    if period <= 0 or len(values) < period:
        return []

    result = []
    for i in range(period - 1, len(values)):
        window = values[i - period + 1:i + 1]
        result.append(sum(window) / period)
    return result


def ema_values(values: Sequence[float], period: int, padded: bool = False) -> Series:
    """Calculate Exponential Moving Average.

    Seeded with the simple mean of the first ``period`` values, then
    ``ema = (value - prev) * k + prev`` with ``k = 2 / (period + 1)``.

    Args:
        values: Values to smooth
        period: EMA period
        padded: If True, return one entry per input value with None before
            the seed. If False, return only computed values.

    Returns:
        EMA series. With fewer than ``period`` values: empty when compact,
        all None when padded.

    Example:
        >>> ema_values([10, 11, 12, 13, 14, 15], 3)
        [11.0, 12.0, 13.0, 14.0]
        >>> ema_values([10, 11, 12, 13], 3, padded=True)
        [None, None, 11.0, 12.0]
    """
    if period <= 0 or len(values) < period:
        return [None] * len(values) if padded else []

    multiplier = 2.0 / (period + 1)
    result: Series = [None] * (period - 1) if padded else []

    prev = sum(values[:period]) / period
    result.append(prev)

    for i in range(period, len(values)):
        prev = (values[i] - prev) * multiplier + prev
        result.append(prev)

    return result


class MovingAverageParams(SourceParams):
    period: int = Field(default=20, ge=1)


class SMA(Indicator):
    """Simple Moving Average.

    Output is compact: the first value belongs to bar ``period - 1``.
    """

    id = "sma"
    name = "Simple Moving Average"
    category = IndicatorCategory.OVERLAY
    params_model = MovingAverageParams

    def required_lookback(self, params: ParamsInput = None) -> int:
        return self.resolve_params(params).period

    def output_offset(self, params: ParamsInput = None) -> int:
        return self.resolve_params(params).period - 1

    def calculate(self, bars: Sequence[OHLCBar], params: ParamsInput = None) -> Series:
        config = self.resolve_params(params)
        if not self.has_enough_data(bars, config):
            return []
        prices = extract_prices(bars, config.source)
        return rolling_mean(prices, config.period)


class EMA(Indicator):
    """Exponential Moving Average.

    Output is compact: the seed (simple mean of the first ``period``
    prices) is the first element and belongs to bar ``period - 1``.
    """

    id = "ema"
    name = "Exponential Moving Average"
    category = IndicatorCategory.OVERLAY
    params_model = MovingAverageParams

    def required_lookback(self, params: ParamsInput = None) -> int:
        return self.resolve_params(params).period

    def output_offset(self, params: ParamsInput = None) -> int:
        return self.resolve_params(params).period - 1

    def calculate(self, bars: Sequence[OHLCBar], params: ParamsInput = None) -> Series:
        config = self.resolve_params(params)
        if not self.has_enough_data(bars, config):
            return []
        prices = extract_prices(bars, config.source)
        return ema_values(prices, config.period)
