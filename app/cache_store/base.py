"""Shared protocol and types for cache storage backends."""

from dataclasses import dataclass
from typing import Any, Optional, Protocol

COORDINATES = "coordinates"
WEATHER = "weather"
FORECAST = "forecast"

# Fixed lifetime of every cache entry (10 minutes).
CACHE_TTL_SECONDS = 600


@dataclass(frozen=True)
class CacheEntry:
    """Cached value with the wall-clock time (seconds) it was stored."""
    data: Any
    timestamp: float


class CacheStore(Protocol):
    """Protocol for namespaced cache backends."""

    def get(self, namespace: str, key: str) -> Optional[Any]:
        """Return cached data, or None if missing or expired (expired entries are dropped)."""

    def set(self, namespace: str, key: str, data: Any) -> None:
        """Store data under key, replacing any existing entry."""

    def is_expired(self, timestamp: float) -> bool:
        """Return True if an entry stamped at ``timestamp`` is past the TTL."""

    def peek(self, namespace: str, key: str) -> Optional[CacheEntry]:
        """Return the raw entry without applying expiry."""

    def delete(self, namespace: str, key: str) -> None:
        """Delete an entry without raising if it is absent."""

    def clear(self, namespace: Optional[str] = None) -> None:
        """Clear one namespace, or everything when namespace is None."""
