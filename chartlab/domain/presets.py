"""
Indicator presets.

A preset is a named, pre-parameterised indicator configuration such as
"SMA 50" that a chart can toggle on and off. Presets refer to indicators by
registry id, so custom indicators can be given presets too.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel, Field

from chartlab.domain.errors import IndicatorNotFoundError, PresetNotFoundError
from chartlab.domain.indicators.base import Series
from chartlab.domain.indicators.registry import IndicatorRegistry, default_registry
from chartlab.domain.models import IndicatorCategory, OHLCBar

logger = logging.getLogger(__name__)


class IndicatorPreset(BaseModel):
    """A named indicator configuration."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    indicator: str = Field(min_length=1, description="Registry id of the indicator")
    category: IndicatorCategory
    params: dict[str, Any] = Field(default_factory=dict)
    enabled: bool = False


DEFAULT_PRESETS: list[IndicatorPreset] = [
    IndicatorPreset(
        id="sma20", name="SMA 20", indicator="sma",
        category=IndicatorCategory.OVERLAY,
        params={"period": 20, "source": "close"},
    ),
    IndicatorPreset(
        id="sma50", name="SMA 50", indicator="sma",
        category=IndicatorCategory.OVERLAY,
        params={"period": 50, "source": "close"},
    ),
    IndicatorPreset(
        id="ema20", name="EMA 20", indicator="ema",
        category=IndicatorCategory.OVERLAY,
        params={"period": 20, "source": "close"},
    ),
    IndicatorPreset(
        id="macd", name="MACD (12,26,9)", indicator="macd",
        category=IndicatorCategory.OSCILLATOR,
        params={"fastPeriod": 12, "slowPeriod": 26, "signalPeriod": 9, "source": "close"},
    ),
    IndicatorPreset(
        id="rsi14", name="RSI 14", indicator="rsi",
        category=IndicatorCategory.OSCILLATOR,
        params={"period": 14, "source": "close", "overbought": 70, "oversold": 30},
    ),
]


class PresetBook:
    """Collection of presets bound to an indicator registry."""

    def __init__(
        self,
        presets: Iterable[IndicatorPreset] | None = None,
        registry: IndicatorRegistry | None = None,
    ):
        self.registry = registry or default_registry
        self._presets: dict[str, IndicatorPreset] = {}
        for preset in presets if presets is not None else DEFAULT_PRESETS:
            self.add(preset)

    def add(self, preset: IndicatorPreset) -> None:
        """Add a preset, replacing any preset with the same id."""
        # Copy so toggling one book never leaks into DEFAULT_PRESETS
        self._presets[preset.id] = preset.model_copy(deep=True)

    def get(self, preset_id: str) -> IndicatorPreset | None:
        return self._presets.get(preset_id)

    def all(self) -> list[IndicatorPreset]:
        return list(self._presets.values())

    def by_category(self, category: IndicatorCategory | str) -> list[IndicatorPreset]:
        category = IndicatorCategory(category)
        return [p for p in self._presets.values() if p.category == category]

    def _require(self, preset_id: str) -> IndicatorPreset:
        preset = self._presets.get(preset_id)
        if preset is None:
            raise PresetNotFoundError(preset_id)
        return preset

    def enable(self, preset_id: str) -> None:
        self._require(preset_id).enabled = True
        logger.debug(f"Enabled preset: {preset_id}")

    def disable(self, preset_id: str) -> None:
        self._require(preset_id).enabled = False
        logger.debug(f"Disabled preset: {preset_id}")

    def enabled(self) -> list[IndicatorPreset]:
        return [p for p in self._presets.values() if p.enabled]

    def calculate(self, preset_id: str, bars: Sequence[OHLCBar]) -> Series:
        """Calculate the primary line of a preset's indicator.

        Raises:
            PresetNotFoundError: If the preset id is unknown
            IndicatorNotFoundError: If the preset's indicator is not registered
            InvalidParametersError: If the preset parameters are invalid
        """
        preset = self._require(preset_id)
        indicator = self.registry.get(preset.indicator)
        if indicator is None:
            logger.warning(f"Preset {preset_id} references unknown indicator {preset.indicator}")
            raise IndicatorNotFoundError(preset.indicator, source=preset_id)
        return indicator.calculate(bars, preset.params)
