"""Tests for reading bars from files."""

import json
from datetime import datetime

import pytest

from chartlab.adapters import read_bars, read_bars_csv
from chartlab.domain import BarDataError

CSV_TEXT = """timestamp,open,high,low,close,volume
1700000000,10,12,9,11,1000
1700000060,11,13,10,12,
"""


class TestReadBars:
    """CSV and JSON bar files."""

    def test_csv(self, tmp_path):
        path = tmp_path / "bars.csv"
        path.write_text(CSV_TEXT)
        bars = read_bars(path)

        assert len(bars) == 2
        assert bars[0].timestamp == 1700000000
        assert bars[0].volume == 1000.0
        assert bars[1].volume == 0.0

    def test_csv_iso_timestamps(self, tmp_path):
        path = tmp_path / "bars.csv"
        path.write_text("Timestamp,Open,High,Low,Close\n2024-01-02T09:30:00,1,2,0.5,1.5\n")
        bars = read_bars_csv(path)
        assert bars[0].timestamp == datetime(2024, 1, 2, 9, 30)

    def test_csv_missing_columns(self, tmp_path):
        path = tmp_path / "bars.csv"
        path.write_text("timestamp,close\n1,10\n")
        with pytest.raises(BarDataError) as exc_info:
            read_bars(path)
        assert "open" in str(exc_info.value)

    def test_csv_invalid_row(self, tmp_path):
        path = tmp_path / "bars.csv"
        path.write_text("timestamp,open,high,low,close\n1,10,12,9,11\n2,10,9,8,9\n")
        with pytest.raises(BarDataError) as exc_info:
            read_bars(path)
        assert exc_info.value.context["line"] == 3

    def test_json_bar_list(self, tmp_path):
        path = tmp_path / "bars.json"
        path.write_text(json.dumps([
            {"timestamp": 1, "open": 1, "high": 2, "low": 1, "close": 2},
            {"timestamp": 2, "open": 2, "high": 3, "low": 2, "close": 3},
        ]))
        assert [b.close for b in read_bars(path)] == [2.0, 3.0]

    def test_json_dataset(self, tmp_path):
        path = tmp_path / "bars.json"
        path.write_text(json.dumps({"data": [{"x": 1, "y": 5}, {"x": 2, "y": 6}]}))
        assert [b.high for b in read_bars(path)] == [5.0, 6.0]

    def test_json_invalid(self, tmp_path):
        path = tmp_path / "bars.json"
        path.write_text("{not json")
        with pytest.raises(BarDataError):
            read_bars(path)

    def test_json_invalid_point_reports_file(self, tmp_path):
        path = tmp_path / "bars.json"
        path.write_text(json.dumps([{"x": 1}]))
        with pytest.raises(BarDataError) as exc_info:
            read_bars(path)
        assert exc_info.value.source == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(BarDataError):
            read_bars(tmp_path / "missing.csv")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "bars.parquet"
        path.write_text("")
        with pytest.raises(BarDataError) as exc_info:
            read_bars(path)
        assert ".parquet" in str(exc_info.value)

    def test_csv_with_byte_order_mark(self, tmp_path):
        path = tmp_path / "bars.csv"
        path.write_bytes(b"\xef\xbb\xbf" + CSV_TEXT.encode("utf-8"))
        bars = read_bars(path)
        assert [b.close for b in bars] == [11.0, 12.0]
