"""
Bar file adapter.

Reads OHLC bars from local CSV or JSON files. CSV files need a header with
timestamp, open, high, low, close and optionally volume. JSON files hold
either a list of bar objects or a chart dataset (see ``to_ohlc_bars``).
"""

import csv
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from chartlab.domain.errors import BarDataError
from chartlab.domain.indicators.alignment import to_ohlc_bars
from chartlab.domain.models import OHLCBar, Timestamp

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("timestamp", "open", "high", "low", "close")


def _parse_timestamp(raw: str) -> Timestamp | str:
    """Numbers stay numbers; anything else is left for datetime parsing."""
    raw = raw.strip()
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return raw


def read_bars_csv(path: str | Path) -> list[OHLCBar]:
    """
    Read bars from a CSV file.

    Raises:
        BarDataError: If columns are missing or a row is invalid
    """
    path = Path(path)
    bars = []

    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        columns = [c.strip().lower() for c in reader.fieldnames or []]
        missing = [c for c in REQUIRED_COLUMNS if c not in columns]
        if missing:
            raise BarDataError(
                f"Missing CSV columns: {', '.join(missing)}", source=str(path)
            )

        for line_no, row in enumerate(reader, start=2):
            row = {k.strip().lower(): v for k, v in row.items() if k}
            try:
                bars.append(OHLCBar(
                    timestamp=_parse_timestamp(row["timestamp"]),
                    open=row["open"],
                    high=row["high"],
                    low=row["low"],
                    close=row["close"],
                    volume=row.get("volume") or 0.0,
                ))
            except ValidationError as e:
                raise BarDataError(
                    f"Invalid bar on line {line_no}: {e.errors()[0].get('msg')}",
                    source=str(path),
                    context={"line": line_no},
                ) from e

    logger.debug(f"Read {len(bars)} bars from {path}")
    return bars


def read_bars_json(path: str | Path) -> list[OHLCBar]:
    """
    Read bars from a JSON file.

    Raises:
        BarDataError: If the file is not valid JSON or a point is invalid
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise BarDataError(f"Invalid JSON: {e}", source=str(path)) from e

    try:
        bars = to_ohlc_bars(data)
    except BarDataError as e:
        e.source = str(path)
        raise

    logger.debug(f"Read {len(bars)} bars from {path}")
    return bars


def read_bars(path: str | Path) -> list[OHLCBar]:
    """
    Read bars from a file, choosing the format by extension.

    Raises:
        BarDataError: If the file is missing, has an unknown extension, or
            contains invalid bars
    """
    path = Path(path)
    if not path.exists():
        raise BarDataError(f"File not found: {path}", source=str(path))

    suffix = path.suffix.lower()
    if suffix == ".csv":
        return read_bars_csv(path)
    if suffix == ".json":
        return read_bars_json(path)
    raise BarDataError(f"Unsupported file type: {suffix or '(none)'}", source=str(path))
