"""Bollinger Bands indicator."""

from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import Field

from chartlab.domain.indicators.base import (
    LineSet,
    MultiLineIndicator,
    ParamsInput,
    Series,
    SourceParams,
)
from chartlab.domain.indicators.prices import extract_prices
from chartlab.domain.models import IndicatorCategory, OHLCBar


@dataclass(frozen=True)
class BollingerResult(LineSet):
    upper: Series
    middle: Series
    lower: Series


def bollinger_bands(
    prices: Sequence[float],
    period: int = 20,
    std_dev: float = 2.0,
) -> tuple[Series, Series, Series]:
    """Calculate Bollinger Bands.

    Upper Band = SMA + (std_dev * standard_deviation)
    Middle Band = SMA
    Lower Band = SMA - (std_dev * standard_deviation)

    Args:
        prices: Price series
        period: Period for SMA and standard deviation (default: 20)
        std_dev: Number of standard deviations for bands (default: 2.0)

    Returns:
        Tuple of (upper_band, middle_band, lower_band), one entry per price
        with None for the first ``period - 1`` entries. All three are empty
        when there are fewer than ``period`` prices.

    Example:
        >>> upper, middle, lower = bollinger_bands([1, 2, 3], period=3, std_dev=1)
        >>> middle
        [None, None, 2.0]

    Notes:
        - Standard deviation is the population form (divides by period)
    """
    if period <= 0 or len(prices) < period:
        return ([], [], [])

    n = len(prices)
    upper: Series = [None] * n
    middle: Series = [None] * n
    lower: Series = [None] * n

    for i in range(period - 1, n):
        window = prices[i - period + 1:i + 1]
        mean = sum(window) / period
        variance = sum((x - mean) ** 2 for x in window) / period
        deviation = (variance ** 0.5) * std_dev

        middle[i] = mean
        upper[i] = mean + deviation
        lower[i] = mean - deviation

    return (upper, middle, lower)


class BollingerParams(SourceParams):
    period: int = Field(default=20, ge=1)
    standard_deviations: float = Field(default=2.0, ge=0)


class BollingerBands(MultiLineIndicator):
    """Bollinger Bands. Full-length output; ``calculate()`` is the middle band."""

    id = "bollinger"
    name = "Bollinger Bands"
    category = IndicatorCategory.OVERLAY
    params_model = BollingerParams
    result_type = BollingerResult
    primary_line = "middle"

    def required_lookback(self, params: ParamsInput = None) -> int:
        return self.resolve_params(params).period

    def calculate_full(self, bars: Sequence[OHLCBar], params: ParamsInput = None) -> BollingerResult:
        config = self.resolve_params(params)
        if not self.has_enough_data(bars, config):
            return BollingerResult.empty()

        prices = extract_prices(bars, config.source)
        upper, middle, lower = bollinger_bands(
            prices, config.period, config.standard_deviations
        )
        return BollingerResult(upper=upper, middle=middle, lower=lower)
