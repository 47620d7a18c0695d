"""Relative Strength Index (RSI) indicator."""

from collections.abc import Sequence

from pydantic import Field

from chartlab.domain.indicators.base import Indicator, ParamsInput, Series, SourceParams
from chartlab.domain.indicators.prices import extract_prices
from chartlab.domain.models import IndicatorCategory, OHLCBar

# RS used when the average loss is zero; RSI saturates at 100 - 100/101
ZERO_LOSS_RS = 100.0


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    rs = ZERO_LOSS_RS if avg_loss == 0 else avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def rsi_values(prices: Sequence[float], period: int = 14) -> list[float]:
    """Calculate RSI using Wilder's smoothing.

    Args:
        prices: Price series
        period: RSI period (default: 14)

    Returns:
        Compact list of RSI values (0-100). The first value comes from the
        seed averages and belongs to price index ``period``. Empty when
        there are ``period`` prices or fewer.

    Example:
        >>> result = rsi_values(list(range(1, 17)), 14)
        >>> len(result), round(result[0], 2)
        (2, 99.01)

    Notes:
        - Seed averages are simple means of the first ``period`` gains/losses
        - Wilder's smoothing: new avg = (prev_avg * (period-1) + current) / period
        - A zero average loss gives RS = 100, not infinity
    """
    if period <= 0 or len(prices) <= period:
        return []

    gains = []
    losses = []
    for i in range(1, len(prices)):
        change = prices[i] - prices[i - 1]
        gains.append(max(change, 0.0))
        losses.append(max(-change, 0.0))

    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period
    result = [_rsi_from_averages(avg_gain, avg_loss)]

    for i in range(period, len(gains)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result.append(_rsi_from_averages(avg_gain, avg_loss))

    return result


class RSIParams(SourceParams):
    period: int = Field(default=14, ge=1)
    # Display levels for the oscillator panel
    overbought: float = Field(default=70.0, ge=0, le=100)
    oversold: float = Field(default=30.0, ge=0, le=100)


class RSI(Indicator):
    """Relative Strength Index.

    Output is compact: the first value belongs to bar ``period``.
    """

    id = "rsi"
    name = "Relative Strength Index"
    category = IndicatorCategory.OSCILLATOR
    params_model = RSIParams

    def required_lookback(self, params: ParamsInput = None) -> int:
        # One extra bar to form the first price change
        return self.resolve_params(params).period + 1

    def output_offset(self, params: ParamsInput = None) -> int:
        return self.resolve_params(params).period

    def calculate(self, bars: Sequence[OHLCBar], params: ParamsInput = None) -> Series:
        config = self.resolve_params(params)
        if not self.has_enough_data(bars, config):
            return []
        prices = extract_prices(bars, config.source)
        return rsi_values(prices, config.period)
