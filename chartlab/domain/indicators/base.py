"""Base types and the computation contract shared by all indicators."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from chartlab.domain.errors import InvalidParametersError
from chartlab.domain.models import IndicatorCategory, IndicatorDescriptor, OHLCBar

logger = logging.getLogger(__name__)

Series = list[float | None]


class IndicatorParams(BaseModel):
    """Parameter set for one indicator.

    Accepts camelCase keys (``fastPeriod``) as well as field names
    (``fast_period``). Unknown keys are dropped and missing keys take the
    declared default.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class SourceParams(IndicatorParams):
    """Parameters for indicators that read a single price series."""
    source: str = Field(default="close", description="Price field or derived source")


ParamsInput = Mapping[str, Any] | IndicatorParams | None


@dataclass(frozen=True)
class LineSet:
    """Named parallel output lines of a multi-line indicator."""

    @classmethod
    def empty(cls) -> "LineSet":
        """Result with every named line empty (insufficient data)."""
        return cls(**{f.name: [] for f in fields(cls)})

    @classmethod
    def line_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def as_dict(self) -> dict[str, Series]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class Indicator(ABC):
    """Base class for all indicators.

    Instances hold no state between calls. ``padded`` records the output
    mode: compact indicators return only computed values, padded ones return
    one entry per bar with None during warm-up.
    """

    id: ClassVar[str]
    name: ClassVar[str]
    category: ClassVar[IndicatorCategory]
    params_model: ClassVar[type[IndicatorParams]] = IndicatorParams
    padded: ClassVar[bool] = False

    @property
    def default_params(self) -> dict[str, Any]:
        """Default parameter values keyed by their public (camelCase) names."""
        return self.params_model().model_dump(by_alias=True)

    def resolve_params(self, params: ParamsInput = None) -> Any:
        """Merge given parameters over the defaults and validate them.

        Raises:
            InvalidParametersError: If a recognized parameter has a bad value
        """
        if isinstance(params, self.params_model):
            return params
        if isinstance(params, IndicatorParams):
            params = params.model_dump(by_alias=True)
        try:
            return self.params_model.model_validate(dict(params or {}))
        except ValidationError as e:
            first_error = e.errors()[0]
            field = ".".join(str(loc) for loc in first_error.get("loc", []))
            msg = first_error.get("msg", "Validation error")
            raise InvalidParametersError(
                f"Invalid parameters: {msg}", source=self.id, field=field
            ) from e

    def public_params(self, params: Mapping[str, Any] | None) -> dict[str, Any]:
        """Rename field-name keys (``fast_period``) to their camelCase aliases.

        Unrecognized keys pass through unchanged. Merging two mappings after
        this call lets the later one win whichever spelling each used.
        """
        aliases = {
            name: info.alias or name
            for name, info in self.params_model.model_fields.items()
        }
        return {aliases.get(key, key): value for key, value in (params or {}).items()}

    def validate_data(self, bars: Sequence[OHLCBar]) -> bool:
        """Check there is anything to compute over."""
        return bars is not None and len(bars) > 0

    def has_enough_data(self, bars: Sequence[OHLCBar], params: ParamsInput = None) -> bool:
        required = self.required_lookback(params)
        if len(bars) < required:
            logger.debug(f"{self.id}: {len(bars)} bars, need {required}")
            return False
        return True

    def output_offset(self, params: ParamsInput = None) -> int:
        """Bar index that the first element of ``calculate()`` belongs to."""
        return 0

    def describe(self) -> IndicatorDescriptor:
        return IndicatorDescriptor(
            id=self.id,
            name=self.name,
            category=self.category,
            default_params=self.default_params,
            padded=self.padded,
        )

    @abstractmethod
    def required_lookback(self, params: ParamsInput = None) -> int:
        """Minimum bar count before the first value can be produced."""

    @abstractmethod
    def calculate(self, bars: Sequence[OHLCBar], params: ParamsInput = None) -> Series:
        """Calculate the primary output line.

        Returns an empty list when there are fewer bars than
        ``required_lookback``.
        """


class MultiLineIndicator(Indicator):
    """Indicator with several named output lines, all full-length."""

    result_type: ClassVar[type[LineSet]]
    primary_line: ClassVar[str]
    padded: ClassVar[bool] = True

    @abstractmethod
    def calculate_full(self, bars: Sequence[OHLCBar], params: ParamsInput = None) -> LineSet:
        """Calculate every output line.

        With insufficient data every line is an empty list.
        """

    def calculate(self, bars: Sequence[OHLCBar], params: ParamsInput = None) -> Series:
        return list(getattr(self.calculate_full(bars, params), self.primary_line))

    def describe(self) -> IndicatorDescriptor:
        return super().describe().model_copy(
            update={"lines": self.result_type.line_names()}
        )
