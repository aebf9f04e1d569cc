# maco/errors.py
# Purpose: exception types raised at the edges of the engine.


class MacoError(RuntimeError):
    """Base class for everything this package raises on purpose."""


class PeriodError(MacoError, ValueError):
    """MA periods violate the caller contract (positive, short < long)."""


class PayloadError(MacoError):
    """Provider reply is not JSON or does not match the StockData shape."""


class DataSourceError(MacoError):
    """HTTP/auth failure talking to the data provider."""
