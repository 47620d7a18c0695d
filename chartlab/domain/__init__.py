from .models import (
    OHLCBar,
    AlignedPoint,
    IndicatorCategory,
    IndicatorDescriptor,
    PriceSource,
    Timestamp,
)
from .errors import (
    ChartlabError,
    InvalidParametersError,
    IndicatorNotFoundError,
    PresetNotFoundError,
    BarDataError,
)
from .presets import IndicatorPreset, PresetBook, DEFAULT_PRESETS

__all__ = [
    # Models
    "OHLCBar",
    "AlignedPoint",
    "IndicatorCategory",
    "IndicatorDescriptor",
    "PriceSource",
    "Timestamp",
    # Errors
    "ChartlabError",
    "InvalidParametersError",
    "IndicatorNotFoundError",
    "PresetNotFoundError",
    "BarDataError",
    # Presets
    "IndicatorPreset",
    "PresetBook",
    "DEFAULT_PRESETS",
]
