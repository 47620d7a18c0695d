"""Tests for indicator presets."""

import pytest

from chartlab.domain import (
    DEFAULT_PRESETS,
    IndicatorCategory,
    IndicatorNotFoundError,
    IndicatorPreset,
    OHLCBar,
    PresetBook,
    PresetNotFoundError,
)
from chartlab.domain.indicators import SMA, create_default_registry


@pytest.fixture
def book():
    return PresetBook(registry=create_default_registry())


@pytest.fixture
def bars():
    return [OHLCBar.flat(i, 100.0 + i) for i in range(60)]


class TestPresetBook:
    """Preset lookups, toggling and evaluation."""

    def test_default_presets(self, book):
        assert [p.id for p in book.all()] == ["sma20", "sma50", "ema20", "macd", "rsi14"]
        assert all(not p.enabled for p in book.all())

    def test_by_category(self, book):
        assert [p.id for p in book.by_category(IndicatorCategory.OVERLAY)] == ["sma20", "sma50", "ema20"]
        assert [p.id for p in book.by_category("oscillator")] == ["macd", "rsi14"]

    def test_enable_disable(self, book):
        book.enable("rsi14")
        assert [p.id for p in book.enabled()] == ["rsi14"]
        book.disable("rsi14")
        assert book.enabled() == []

    def test_books_do_not_share_state(self, book):
        book.enable("sma20")
        assert PresetBook().get("sma20").enabled is False
        assert all(not p.enabled for p in DEFAULT_PRESETS)

    def test_unknown_preset(self, book):
        assert book.get("vwap") is None
        with pytest.raises(PresetNotFoundError):
            book.enable("vwap")
        with pytest.raises(PresetNotFoundError):
            book.calculate("vwap", [])

    def test_calculate(self, book, bars):
        result = book.calculate("sma50", bars)
        assert result == SMA().calculate(bars, {"period": 50})
        assert len(result) == 11

    def test_calculate_insufficient_data(self, book, bars):
        assert book.calculate("sma50", bars[:10]) == []

    def test_unregistered_indicator(self, book):
        book.add(IndicatorPreset(
            id="vwap", name="VWAP", indicator="vwap", category=IndicatorCategory.OVERLAY,
        ))
        with pytest.raises(IndicatorNotFoundError) as exc_info:
            book.calculate("vwap", [])
        assert exc_info.value.source == "vwap"

    def test_custom_preset(self, book, bars):
        book.add(IndicatorPreset(
            id="bb10", name="BB 10", indicator="bollinger",
            category=IndicatorCategory.OVERLAY,
            params={"period": 10, "standardDeviations": 1.5},
        ))
        middle = book.calculate("bb10", bars)
        assert len(middle) == len(bars)
        assert middle[9] == pytest.approx(104.5)
