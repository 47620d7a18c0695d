"""Price series extraction from OHLC bars."""

from collections.abc import Sequence

from chartlab.domain.models import OHLCBar, PriceSource


def typical_price(bars: Sequence[OHLCBar]) -> list[float]:
    """Calculate typical price (high + low + close) / 3 per bar.

    Example:
        >>> typical_price([OHLCBar(timestamp=0, open=10, high=12, low=9, close=12)])
        [11.0]
    """
    return [(b.high + b.low + b.close) / 3 for b in bars]


def hlc3(bars: Sequence[OHLCBar]) -> list[float]:
    """Calculate HLC3, the same formula as typical price."""
    return [(b.high + b.low + b.close) / 3 for b in bars]


def ohlc4(bars: Sequence[OHLCBar]) -> list[float]:
    """Calculate (open + high + low + close) / 4 per bar."""
    return [(b.open + b.high + b.low + b.close) / 4 for b in bars]


def extract_prices(
    bars: Sequence[OHLCBar],
    field: PriceSource | str = PriceSource.CLOSE,
) -> list[float]:
    """Select one price per bar.

    Args:
        bars: Bar sequence
        field: open, high, low, close, volume, or a derived source
            (hlc3, ohlc4, typical). Unrecognized names read close.

    Returns:
        One float per bar; empty for empty input

    Example:
        >>> bars = [OHLCBar(timestamp=0, open=1, high=3, low=1, close=2)]
        >>> extract_prices(bars, "high")
        [3.0]
    """
    try:
        source = PriceSource(field)
    except ValueError:
        source = PriceSource.CLOSE

    if source is PriceSource.OPEN:
        return [b.open for b in bars]
    if source is PriceSource.HIGH:
        return [b.high for b in bars]
    if source is PriceSource.LOW:
        return [b.low for b in bars]
    if source is PriceSource.VOLUME:
        return [b.volume or 0.0 for b in bars]
    if source is PriceSource.HLC3:
        return hlc3(bars)
    if source is PriceSource.TYPICAL:
        return typical_price(bars)
    if source is PriceSource.OHLC4:
        return ohlc4(bars)
    return [b.close for b in bars]
