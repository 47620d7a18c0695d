"""Technical indicator engine for price charts.

Pure, synchronous computations over time-ordered OHLC bars. Each indicator
is a stateless class implementing the ``Indicator`` contract; the registry
maps ids to those classes and the alignment helpers place output on the
bar timestamps.

Output modes:
    - Compact (SMA, EMA, RSI): only computed values, use ``output_offset``
      or ``align_to_timestamps`` to position them
    - Padded (Bollinger, MACD, Stochastic): one entry per bar, None during
      warm-up

Example:
    >>> from chartlab.domain.indicators import default_registry, to_ohlc_bars
    >>>
    >>> bars = to_ohlc_bars([100 + i for i in range(21)])
    >>> default_registry.get("sma").calculate(bars, {"period": 20})
    [109.5, 110.5]
"""

from chartlab.domain.indicators.alignment import (
    align_full,
    align_indicator,
    align_to_timestamps,
    to_ohlc_bars,
)
from chartlab.domain.indicators.base import (
    Indicator,
    IndicatorParams,
    LineSet,
    MultiLineIndicator,
    Series,
    SourceParams,
)
from chartlab.domain.indicators.bollinger import (
    BollingerBands,
    BollingerParams,
    BollingerResult,
    bollinger_bands,
)
from chartlab.domain.indicators.macd import MACD, MACDParams, MACDResult, macd
from chartlab.domain.indicators.moving_averages import (
    EMA,
    SMA,
    MovingAverageParams,
    ema_values,
    rolling_mean,
)
from chartlab.domain.indicators.prices import extract_prices, hlc3, ohlc4, typical_price
from chartlab.domain.indicators.registry import (
    BUILTIN_INDICATORS,
    IndicatorRegistry,
    create_default_registry,
    default_registry,
)
from chartlab.domain.indicators.rsi import RSI, RSIParams, rsi_values
from chartlab.domain.indicators.stochastic import (
    Stochastic,
    StochasticParams,
    StochasticResult,
    raw_k_values,
    stochastic,
)

__all__ = [
    # Contract
    "Indicator",
    "MultiLineIndicator",
    "IndicatorParams",
    "SourceParams",
    "LineSet",
    "Series",
    # Price series
    "extract_prices",
    "typical_price",
    "hlc3",
    "ohlc4",
    # Indicators
    "SMA",
    "EMA",
    "MovingAverageParams",
    "RSI",
    "RSIParams",
    "BollingerBands",
    "BollingerParams",
    "BollingerResult",
    "MACD",
    "MACDParams",
    "MACDResult",
    "Stochastic",
    "StochasticParams",
    "StochasticResult",
    # Functional forms
    "rolling_mean",
    "ema_values",
    "rsi_values",
    "bollinger_bands",
    "macd",
    "stochastic",
    "raw_k_values",
    # Registry
    "IndicatorRegistry",
    "BUILTIN_INDICATORS",
    "create_default_registry",
    "default_registry",
    # Alignment
    "to_ohlc_bars",
    "align_to_timestamps",
    "align_indicator",
    "align_full",
]
