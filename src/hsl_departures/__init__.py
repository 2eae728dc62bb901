"""HSL departures widget core: timeline construction and geo-aware caching."""

__version__ = "0.1.0"
