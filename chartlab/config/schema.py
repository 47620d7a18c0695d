"""
Configuration schema with validation.

All configuration is validated at load time using Pydantic.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PresetsConfig(BaseModel):
    """Which indicator presets start enabled."""

    enabled: list[str] = Field(default_factory=list)


class OutputConfig(BaseModel):
    """Output preferences."""

    float_precision: int = Field(default=6, ge=0, le=12, description="Decimal places in output")
    format: Literal["json", "table"] = Field(default="json")


class ChartlabConfig(BaseModel):
    """
    Root configuration model.

    All settings are validated on load.
    """

    log_level: str = Field(default="WARNING")

    # Per-indicator parameter overrides, e.g. {"rsi": {"period": 21}}
    indicators: dict[str, dict[str, Any]] = Field(default_factory=dict)

    presets: PresetsConfig = Field(default_factory=PresetsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        v = v.upper().strip()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return v

    def params_for(self, indicator_id: str) -> dict[str, Any]:
        """Configured parameter overrides for an indicator (may be empty)."""
        return dict(self.indicators.get(indicator_id, {}))
