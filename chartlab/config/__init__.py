from .loader import load_config, get_config, reload_config, ConfigError
from .schema import ChartlabConfig, OutputConfig, PresetsConfig

__all__ = [
    "load_config",
    "get_config",
    "reload_config",
    "ConfigError",
    "ChartlabConfig",
    "OutputConfig",
    "PresetsConfig",
]
