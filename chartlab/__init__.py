"""chartlab - technical indicators for price charts."""

__version__ = "0.1.0"
