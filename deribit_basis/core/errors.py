"""Custom exception hierarchy for market data fetching."""

from __future__ import annotations


class MarketDataError(RuntimeError):
    """Base class for all domain-specific exceptions."""


class ExchangeTransientError(MarketDataError):
    """Represents temporary issues such as rate limiting or network failures."""


class MalformedPayloadError(MarketDataError):
    """Raised when a response is not JSON or does not have the expected shape."""
