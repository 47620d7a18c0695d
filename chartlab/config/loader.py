"""
Configuration loader.

Settings come from, lowest priority first:
1. Built-in defaults on ``ChartlabConfig``
2. The first TOML file found on ``CONFIG_PATHS`` (or an explicit path)
3. ``CHARTLAB_*`` environment variables, see ``ENV_OVERRIDES``

A ``.env`` file is honoured through python-dotenv by the CLI before this
module reads the environment.
"""

import logging
import os
import tomllib
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from chartlab.domain.errors import ChartlabError

from .schema import ChartlabConfig

logger = logging.getLogger(__name__)

# First existing file wins
CONFIG_PATHS = [
    Path("chartlab.toml"),
    Path(".chartlab.toml"),
    Path.home() / ".config" / "chartlab" / "config.toml",
]

ENV_PREFIX = "CHARTLAB_"


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


# Environment variable suffix -> (dotted config key, converter)
ENV_OVERRIDES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "LOG_LEVEL": ("log_level", str),
    "OUTPUT_FORMAT": ("output.format", str),
    "FLOAT_PRECISION": ("output.float_precision", int),
    "PRESETS": ("presets.enabled", _split_list),
}


class ConfigError(ChartlabError):
    """Raised when a config file cannot be read or fails validation."""


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse TOML: {e}", source=str(path)) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}", source=str(path)) from e

    logger.info(f"Loaded config from: {path}")
    return data


def _locate(config_path: Path | str | None) -> Path | None:
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", source=str(path))
        return path
    return next((p for p in CONFIG_PATHS if p.exists()), None)


def _set_dotted(data: dict[str, Any], dotted_key: str, value: Any) -> None:
    *parents, leaf = dotted_key.split(".")
    for part in parents:
        data = data.setdefault(part, {})
    data[leaf] = value


def _apply_env_overrides(config_data: dict[str, Any]) -> None:
    """Write CHARTLAB_* variables into the raw config mapping."""
    for suffix, (dotted_key, convert) in ENV_OVERRIDES.items():
        raw = os.environ.get(ENV_PREFIX + suffix)
        if not raw:
            continue
        try:
            value = convert(raw)
        except ValueError as e:
            raise ConfigError(
                f"Invalid value for {ENV_PREFIX}{suffix}: {raw!r}",
                source="environment",
                field=dotted_key,
            ) from e
        _set_dotted(config_data, dotted_key, value)
        logger.debug(f"{ENV_PREFIX}{suffix} overrides {dotted_key}")


def load_config(config_path: Path | str | None = None) -> ChartlabConfig:
    """
    Load and validate configuration.

    Args:
        config_path: Explicit config file; skips the search path when given

    Raises:
        ConfigError: If the file is missing, unparseable, or invalid
    """
    path = _locate(config_path)
    config_data = _read_toml(path) if path else {}
    _apply_env_overrides(config_data)

    try:
        return ChartlabConfig(**config_data)
    except ValidationError as e:
        first = e.errors()[0]
        raise ConfigError(
            f"Invalid configuration: {first.get('msg', 'validation error')}",
            source=str(path) if path else None,
            field=".".join(str(loc) for loc in first.get("loc", ())),
        ) from e


@lru_cache
def get_config() -> ChartlabConfig:
    """Process-wide configuration, loaded on first use."""
    return load_config()


def reload_config(config_path: Path | str | None = None) -> ChartlabConfig:
    """Drop the cached configuration and load it again.

    An explicit path is loaded directly and does not populate the cache.
    """
    get_config.cache_clear()
    if config_path:
        return load_config(config_path)
    return get_config()
