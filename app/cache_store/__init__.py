"""Cache storage backends."""

from .base import CACHE_TTL_SECONDS, COORDINATES, FORECAST, WEATHER, CacheEntry, CacheStore
from .memory import InMemoryCacheStore

__all__ = [
    "CACHE_TTL_SECONDS",
    "COORDINATES",
    "FORECAST",
    "WEATHER",
    "CacheEntry",
    "CacheStore",
    "InMemoryCacheStore",
]
