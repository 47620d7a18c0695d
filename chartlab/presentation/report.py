"""
Plain-text table output for indicator responses.

Pure formatting logic - no I/O.
"""

from datetime import datetime

from .json_api import IndicatorInfoResponse, IndicatorResponse, PointResponse


def _format_timestamp(x: int | float | datetime) -> str:
    """Format a point timestamp for display."""
    if isinstance(x, datetime):
        return x.strftime("%Y-%m-%d %H:%M")
    return str(x)


def _format_value(y: float | None, precision: int) -> str:
    if y is None:
        return "-"
    return f"{y:.{precision}f}"


def format_indicator_table(response: IndicatorResponse, precision: int = 6) -> str:
    """
    Render an indicator response as a markdown table.

    One row per timestamp that has a value on any line; lines without a
    value at that timestamp show ``-``.
    """
    line_names = [line.name for line in response.lines]
    by_line: list[dict[str, float]] = []
    timestamps: list[PointResponse] = []
    seen = set()

    for line in response.lines:
        values = {}
        for point in line.points:
            key = _format_timestamp(point.x)
            values[key] = point.y
            if key not in seen:
                seen.add(key)
                timestamps.append(point)
        by_line.append(values)

    params = ", ".join(f"{k}={v}" for k, v in response.params.items())
    lines = [
        f"## {response.name} ({params})",
        "",
        "| timestamp | " + " | ".join(line_names) + " |",
        "|---" * (len(line_names) + 1) + "|",
    ]

    if not timestamps:
        lines.append(f"_Not enough data: {response.bar_count} bars_")
        return "\n".join(lines)

    # The first line spans every later line, so first-seen order is time order
    for point in timestamps:
        key = _format_timestamp(point.x)
        cells = [_format_value(values.get(key), precision) for values in by_line]
        lines.append(f"| {key} | " + " | ".join(cells) + " |")

    return "\n".join(lines)


def format_catalog(indicators: list[IndicatorInfoResponse]) -> str:
    """Render the list of available indicators."""
    lines = []
    for info in indicators:
        defaults = ", ".join(f"{k}={v}" for k, v in info.default_params.items())
        mode = "padded" if info.padded else "compact"
        lines.append(f"{info.id:<12} {info.name:<28} {info.category:<11} {mode:<8} {defaults}")
    return "\n".join(lines)
