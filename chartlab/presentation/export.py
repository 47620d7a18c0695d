"""
Data export utilities.

Export indicator responses to CSV and JSON files.
"""

import csv
import json
from pathlib import Path

from .json_api import IndicatorResponse, to_json


def export_indicator_csv(
    response: IndicatorResponse,
    filepath: str | Path,
    include_header: bool = True,
) -> None:
    """
    Export an indicator response to CSV in long form.

    Args:
        response: Calculated indicator
        filepath: Output file path
        include_header: Include header row
    """
    fieldnames = ["indicator", "line", "timestamp", "value"]

    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)

        if include_header:
            writer.writeheader()

        for line in response.lines:
            for point in line.points:
                writer.writerow({
                    "indicator": response.id,
                    "line": line.name,
                    "timestamp": point.x.isoformat() if hasattr(point.x, "isoformat") else point.x,
                    "value": point.y,
                })


def export_indicator_json(response: IndicatorResponse, filepath: str | Path) -> Path:
    """
    Export an indicator response to a JSON file.

    Returns:
        Path written
    """
    path = Path(filepath)
    path.write_text(json.dumps(to_json(response), indent=2), encoding="utf-8")
    return path
