"""Error taxonomy for upstream geocoding/weather lookups.

"City not found" is deliberately absent: resolvers return ``None`` for it.
"""

from __future__ import annotations


class WeatherLookupError(Exception):
    """Base class for failures talking to the upstream services."""


class TransportError(WeatherLookupError):
    """The request never completed (DNS, connection refused, timeout...)."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Request to {url} failed: {message}")
        self.url = url


class UpstreamError(WeatherLookupError):
    """A response arrived but its HTTP status is outside the success range."""

    def __init__(self, url: str, status: int, reason: str | None = None) -> None:
        detail = f"{status} {reason}" if reason else str(status)
        super().__init__(f"Upstream API error: {detail} ({url})")
        self.url = url
        self.status = status
        self.reason = reason


class ParseError(WeatherLookupError):
    """The response body could not be decoded as JSON."""

    def __init__(self, url: str, snippet: str = "") -> None:
        super().__init__(f"Upstream returned non-JSON response from {url}: {snippet[:200]}")
        self.url = url
