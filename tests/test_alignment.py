"""Tests for dataset conversion and timestamp alignment."""

import pytest

from chartlab.domain import AlignedPoint, BarDataError, OHLCBar
from chartlab.domain.indicators import (
    MACD,
    RSI,
    SMA,
    BollingerBands,
    align_full,
    align_indicator,
    align_to_timestamps,
    to_ohlc_bars,
)


def _bars(closes, start=1000):
    return [OHLCBar.flat(start + i * 60, float(c)) for i, c in enumerate(closes)]


class TestToOHLCBars:
    """Chart dataset conversion."""

    def test_candlestick_points(self):
        bars = to_ohlc_bars([
            {"x": 1, "o": 10, "h": 12, "l": 9, "c": 11, "v": 500},
            {"x": 2, "o": 11, "h": 13, "l": 10, "c": 12},
        ])
        assert bars[0] == OHLCBar(timestamp=1, open=10, high=12, low=9, close=11, volume=500)
        assert bars[1].volume == 0.0

    def test_long_field_names(self):
        bars = to_ohlc_bars([
            {"timestamp": 5, "open": 1, "high": 2, "low": 0.5, "close": 1.5, "volume": 10},
        ])
        assert bars[0].timestamp == 5
        assert bars[0].low == 0.5

    def test_value_points_become_flat_bars(self):
        bars = to_ohlc_bars([{"x": 1, "y": 10.0}, {"x": 2, "y": 11.0}])
        assert [b.close for b in bars] == [10.0, 11.0]
        assert all(b.open == b.high == b.low == b.close for b in bars)
        assert all(b.volume == 0 for b in bars)

    def test_dataset_mapping(self):
        bars = to_ohlc_bars({"label": "AAPL", "data": [{"x": 1, "y": 3.0}]})
        assert len(bars) == 1

    def test_bare_numbers_use_index(self):
        bars = to_ohlc_bars([4.0, 5.0])
        assert [b.timestamp for b in bars] == [0, 1]

    def test_empty_dataset(self):
        assert to_ohlc_bars([]) == []
        assert to_ohlc_bars({"data": []}) == []

    def test_mapping_without_data_list(self):
        with pytest.raises(BarDataError):
            to_ohlc_bars({"x": 1, "y": 3.0})
        with pytest.raises(BarDataError):
            to_ohlc_bars({"data": "1,2,3"})

    def test_invalid_point(self):
        with pytest.raises(BarDataError) as exc_info:
            to_ohlc_bars([{"x": 1, "y": 1.0}, {"x": 2, "label": "oops"}])
        assert exc_info.value.context["index"] == 1

    def test_inconsistent_candle(self):
        with pytest.raises(BarDataError):
            to_ohlc_bars([{"x": 1, "o": 10, "h": 9, "l": 8, "c": 9}])


class TestAlignToTimestamps:
    """Compact output alignment."""

    def test_offset_pairs_values(self):
        bars = _bars([1, 2, 3, 4])
        aligned = align_to_timestamps([2.5, 3.5], bars, offset=2)
        assert aligned == [AlignedPoint(1120, 2.5), AlignedPoint(1180, 3.5)]

    def test_values_past_end_are_dropped(self):
        bars = _bars([1, 2, 3])
        aligned = align_to_timestamps([1.0, 2.0, 3.0], bars, offset=1)
        assert [p.value for p in aligned] == [1.0, 2.0]

    def test_no_offset(self):
        bars = _bars([1, 2])
        assert [p.timestamp for p in align_to_timestamps([9.0, 8.0], bars)] == [1000, 1060]


class TestAlignIndicator:
    """Indicator-aware alignment for both output modes."""

    def test_compact_sma(self):
        bars = _bars(range(10))
        aligned = align_indicator(SMA(), bars, {"period": 3})
        assert aligned[0] == AlignedPoint(bars[2].timestamp, 1.0)
        assert aligned[-1].timestamp == bars[-1].timestamp
        assert len(aligned) == 8

    def test_compact_rsi(self):
        bars = _bars([1, 2, 1, 2, 3])
        aligned = align_indicator(RSI(), bars, {"period": 2})
        assert [p.timestamp for p in aligned] == [b.timestamp for b in bars[2:]]

    def test_padded_bollinger(self):
        bars = _bars(range(25))
        aligned = align_indicator(BollingerBands(), bars)
        assert len(aligned) == 6
        assert aligned[0].timestamp == bars[19].timestamp

    def test_insufficient_data(self):
        assert align_indicator(SMA(), _bars([1, 2])) == []

    def test_align_full_macd(self):
        bars = _bars([100 + (i % 7) for i in range(50)])
        lines = align_full(MACD(), bars)
        assert set(lines) == {"macd", "signal", "histogram"}
        assert lines["macd"][0].timestamp == bars[25].timestamp
        assert lines["signal"][0].timestamp == bars[33].timestamp
        assert len(lines["histogram"]) == len(lines["signal"])
