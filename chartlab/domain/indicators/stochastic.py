"""Stochastic Oscillator indicator."""

from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import Field

from chartlab.domain.indicators.base import (
    IndicatorParams,
    LineSet,
    MultiLineIndicator,
    ParamsInput,
    Series,
)
from chartlab.domain.indicators.moving_averages import rolling_mean
from chartlab.domain.models import IndicatorCategory, OHLCBar

# %K when the window has no high/low range
FLAT_RANGE_K = 50.0


@dataclass(frozen=True)
class StochasticResult(LineSet):
    k: Series
    d: Series


def raw_k_values(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    k_period: int,
) -> list[float]:
    """Calculate unsmoothed %K for every full window.

    %K = 100 * (Close - Lowest Low) / (Highest High - Lowest Low)

    Returns:
        Compact list; the first value belongs to index ``k_period - 1``

    Example:
        >>> raw_k_values([2, 3, 4], [0, 1, 2], [1, 3, 2.5], 2)
        [100.0, 50.0]
    """
    if len(highs) != len(lows) or len(highs) != len(closes):
        raise ValueError("highs, lows, and closes must have same length")

    result = []
    for i in range(k_period - 1, len(closes)):
        highest_high = max(highs[i - k_period + 1:i + 1])
        lowest_low = min(lows[i - k_period + 1:i + 1])

        price_range = highest_high - lowest_low
        if price_range == 0:
            result.append(FLAT_RANGE_K)
        else:
            result.append(100.0 * (closes[i] - lowest_low) / price_range)

    return result


def stochastic(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    k_period: int = 14,
    d_period: int = 3,
    smooth_k: int = 1,
) -> tuple[Series, Series]:
    """Calculate Stochastic Oscillator (%K and %D).

    Args:
        highs: High prices
        lows: Low prices
        closes: Closing prices
        k_period: Lookback window for %K (default: 14)
        d_period: SMA period for %D (default: 3)
        smooth_k: SMA period applied to raw %K, 1 disables (default: 1)

    Returns:
        Tuple of (k_values, d_values), one entry per bar with None before
        each line's first value

    Notes:
        - %K starts at index k_period + smooth_k - 2
        - %D starts at index k_period + smooth_k + d_period - 3
    """
    n = len(closes)
    k_line: Series = [None] * n
    d_line: Series = [None] * n

    smoothed = raw_k_values(highs, lows, closes, k_period)
    if smooth_k > 1:
        smoothed = rolling_mean(smoothed, smooth_k)

    k_start = k_period - 1 + (smooth_k - 1)
    for i, value in enumerate(smoothed):
        k_line[k_start + i] = value

    d_start = k_start + d_period - 1
    for i, value in enumerate(rolling_mean(smoothed, d_period)):
        d_line[d_start + i] = value

    return (k_line, d_line)


class StochasticParams(IndicatorParams):
    k_period: int = Field(default=14, ge=1)
    d_period: int = Field(default=3, ge=1)
    smooth_k: int = Field(default=1, ge=1)


class Stochastic(MultiLineIndicator):
    """Stochastic Oscillator. Full-length output; ``calculate()`` is %K."""

    id = "stochastic"
    name = "Stochastic"
    category = IndicatorCategory.OSCILLATOR
    params_model = StochasticParams
    result_type = StochasticResult
    primary_line = "k"

    def required_lookback(self, params: ParamsInput = None) -> int:
        config = self.resolve_params(params)
        return config.k_period + config.smooth_k + config.d_period - 1

    def calculate_full(self, bars: Sequence[OHLCBar], params: ParamsInput = None) -> StochasticResult:
        config = self.resolve_params(params)
        if not self.has_enough_data(bars, config):
            return StochasticResult.empty()

        k_line, d_line = stochastic(
            [b.high for b in bars],
            [b.low for b in bars],
            [b.close for b in bars],
            config.k_period,
            config.d_period,
            config.smooth_k,
        )
        return StochasticResult(k=k_line, d=d_line)
