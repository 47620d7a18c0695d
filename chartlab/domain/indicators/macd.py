"""MACD (Moving Average Convergence Divergence) indicator."""

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
from chartlab.domain.indicators.moving_averages import ema_values
from chartlab.domain.indicators.prices import extract_prices
from chartlab.domain.models import IndicatorCategory, OHLCBar


@dataclass(frozen=True)
class MACDResult(LineSet):
    macd: Series
    signal: Series
    histogram: Series


def macd(
    prices: Sequence[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> tuple[Series, Series, Series]:
    """Calculate MACD indicator.

    MACD Line = EMA(fast) - EMA(slow)
    Signal Line = EMA(MACD Line, signal periods)
    Histogram = MACD Line - Signal Line

    Args:
        prices: Price series
        fast: Fast EMA period (default: 12)
        slow: Slow EMA period (default: 26)
        signal: Signal line EMA period (default: 9)

    Returns:
        Tuple of (macd_line, signal_line, histogram), each one entry per
        price with None where undefined

    Notes:
        - Both EMAs are computed padded so they line up by position
        - The signal EMA runs over the non-None MACD values and is mapped
          back starting at the first valid MACD index
    """
    n = len(prices)
    fast_ema = ema_values(prices, fast, padded=True)
    slow_ema = ema_values(prices, slow, padded=True)

    macd_line: Series = []
    for i in range(n):
        if fast_ema[i] is None or slow_ema[i] is None:
            macd_line.append(None)
        else:
            macd_line.append(fast_ema[i] - slow_ema[i])

    signal_line: Series = [None] * n
    histogram: Series = [None] * n

    dense_macd = [v for v in macd_line if v is not None]
    signal_values = ema_values(dense_macd, signal, padded=True)

    signal_idx = 0
    for i in range(n):
        if macd_line[i] is not None and signal_idx < len(signal_values):
            signal_line[i] = signal_values[signal_idx]
            signal_idx += 1

    for i in range(n):
        if macd_line[i] is not None and signal_line[i] is not None:
            histogram[i] = macd_line[i] - signal_line[i]

    return (macd_line, signal_line, histogram)


class MACDParams(SourceParams):
    fast_period: int = Field(default=12, ge=1)
    slow_period: int = Field(default=26, ge=1)
    signal_period: int = Field(default=9, ge=1)


class MACD(MultiLineIndicator):
    """MACD. Full-length output; ``calculate()`` is the MACD line."""

    id = "macd"
    name = "MACD"
    category = IndicatorCategory.OSCILLATOR
    params_model = MACDParams
    result_type = MACDResult
    primary_line = "macd"

    def required_lookback(self, params: ParamsInput = None) -> int:
        config = self.resolve_params(params)
        return config.slow_period + config.signal_period

    def calculate_full(self, bars: Sequence[OHLCBar], params: ParamsInput = None) -> MACDResult:
        config = self.resolve_params(params)
        if not self.has_enough_data(bars, config):
            return MACDResult.empty()

        prices = extract_prices(bars, config.source)
        macd_line, signal_line, histogram = macd(
            prices, config.fast_period, config.slow_period, config.signal_period
        )
        return MACDResult(macd=macd_line, signal=signal_line, histogram=histogram)
