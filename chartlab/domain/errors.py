"""
Error types for chartlab.

Indicator arithmetic itself never raises: insufficient data yields empty
output and degenerate numeric cases saturate. These errors cover the seams
around it: parameter validation, lookups by id, and raw input parsing.
"""

from typing import Any


class ChartlabError(Exception):
    """
    Base exception for caller-facing failures.

    Carries optional structured context for logging and CLI messages.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        field: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.message = message
        self.source = source
        self.field = field
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.source:
            parts.append(f"Source: {self.source}")
        if self.field:
            parts.append(f"Field: {self.field}")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "source": self.source,
            "field": self.field,
            "context": self.context,
        }


class InvalidParametersError(ChartlabError):
    """Raised when indicator parameters fail validation."""


class IndicatorNotFoundError(ChartlabError):
    """Raised when an indicator id is required but not registered."""

    def __init__(self, indicator_id: str, source: str | None = None):
        self.indicator_id = indicator_id
        super().__init__(
            f"Unknown indicator: {indicator_id}",
            source=source,
            context={"indicator_id": indicator_id},
        )


class PresetNotFoundError(ChartlabError):
    """Raised when a preset id is not present in a preset book."""

    def __init__(self, preset_id: str):
        self.preset_id = preset_id
        super().__init__(
            f"Unknown preset: {preset_id}",
            context={"preset_id": preset_id},
        )


class BarDataError(ChartlabError):
    """Raised when raw price data cannot be turned into OHLC bars."""
