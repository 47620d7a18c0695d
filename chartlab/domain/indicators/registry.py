"""
Indicator registry.

Maps string ids to indicator classes so charts can request indicators by
name. ``get`` builds a fresh instance on every call.

The registry is not locked. It is filled at start-up; a host that
registers indicators from several threads must synchronize itself.
"""

import logging
from collections.abc import Callable

from chartlab.domain.indicators.base import Indicator
from chartlab.domain.indicators.bollinger import BollingerBands
from chartlab.domain.indicators.macd import MACD
from chartlab.domain.indicators.moving_averages import EMA, SMA
from chartlab.domain.indicators.rsi import RSI
from chartlab.domain.indicators.stochastic import Stochastic
from chartlab.domain.models import IndicatorCategory, IndicatorDescriptor

logger = logging.getLogger(__name__)

IndicatorFactory = Callable[[], Indicator]

BUILTIN_INDICATORS: dict[str, IndicatorFactory] = {
    "sma": SMA,
    "ema": EMA,
    "bollinger": BollingerBands,
    "rsi": RSI,
    "macd": MACD,
    "stochastic": Stochastic,
}


class IndicatorRegistry:
    """Runtime-extensible mapping from indicator id to constructor."""

    def __init__(self) -> None:
        self._indicators: dict[str, IndicatorFactory] = {}

    def register(self, indicator_id: str, factory: IndicatorFactory) -> None:
        """Register a constructor. An existing entry for the id is replaced."""
        if indicator_id in self._indicators:
            logger.debug(f"Replacing indicator registration: {indicator_id}")
        else:
            logger.debug(f"Registered indicator: {indicator_id}")
        self._indicators[indicator_id] = factory

    def get(self, indicator_id: str) -> Indicator | None:
        """Construct a new instance, or None if the id is unknown."""
        factory = self._indicators.get(indicator_id)
        return factory() if factory else None

    def has(self, indicator_id: str) -> bool:
        return indicator_id in self._indicators

    def get_all(self) -> dict[str, IndicatorFactory]:
        """Copy of the id to constructor mapping."""
        return dict(self._indicators)

    def ids(self) -> list[str]:
        return list(self._indicators)

    def describe_all(self, category: IndicatorCategory | None = None) -> list[IndicatorDescriptor]:
        """Descriptors for registered indicators, optionally one category only."""
        descriptors = []
        for indicator_id in self._indicators:
            indicator = self.get(indicator_id)
            descriptor = indicator.describe()
            if descriptor.id != indicator_id:
                descriptor = descriptor.model_copy(update={"id": indicator_id})
            if category is None or descriptor.category == category:
                descriptors.append(descriptor)
        return descriptors

    def __contains__(self, indicator_id: object) -> bool:
        return indicator_id in self._indicators

    def __len__(self) -> int:
        return len(self._indicators)


def create_default_registry() -> IndicatorRegistry:
    """Build a registry holding the six built-in indicators."""
    registry = IndicatorRegistry()
    for indicator_id, factory in BUILTIN_INDICATORS.items():
        registry.register(indicator_id, factory)
    return registry


# Process-wide registry used by the module-level helpers
default_registry = create_default_registry()


def register(indicator_id: str, factory: IndicatorFactory) -> None:
    default_registry.register(indicator_id, factory)


def get(indicator_id: str) -> Indicator | None:
    return default_registry.get(indicator_id)


def has(indicator_id: str) -> bool:
    return default_registry.has(indicator_id)
