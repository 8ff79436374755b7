"""
Exception types for the ratings dashboard.

Malformed rating data never raises; it is dropped where it is read. These
exceptions are reserved for callers breaking a function's contract and for
data sources that cannot be reached.
"""


class InvalidArgument(ValueError):
    """Raised when a caller passes something a function cannot work with."""


class ConnectorError(RuntimeError):
    """Raised when a data source request fails."""
