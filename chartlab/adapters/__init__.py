from .bar_files import read_bars, read_bars_csv, read_bars_json

__all__ = [
    "read_bars",
    "read_bars_csv",
    "read_bars_json",
]
