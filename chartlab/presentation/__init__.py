from .json_api import (
    IndicatorResponse,
    IndicatorInfoResponse,
    LineResponse,
    PointResponse,
    build_indicator_response,
    descriptor_to_response,
    to_json,
)
from .report import format_indicator_table, format_catalog
from .export import export_indicator_csv, export_indicator_json

__all__ = [
    # JSON API
    "IndicatorResponse",
    "IndicatorInfoResponse",
    "LineResponse",
    "PointResponse",
    "build_indicator_response",
    "descriptor_to_response",
    "to_json",
    # Text output
    "format_indicator_table",
    "format_catalog",
    # Export
    "export_indicator_csv",
    "export_indicator_json",
]
