"""In-memory cache store with a fixed TTL and expiration on read."""

import threading
import time
from typing import Any, Callable, Optional

from app.cache_store.base import CACHE_TTL_SECONDS, CacheEntry, CacheStore

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_store/in_memory_cache_store")


class InMemoryCacheStore(CacheStore):
    """Thread-safe, TTL-aware in-memory store.

    Entries live for the life of the process; nothing is evicted except an
    expired entry at the moment it is read.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        """Initialize an empty store. ``clock`` returns the current time in seconds."""
        logger.debug("Initializing InMemoryCacheStore")
        self.ttl = CACHE_TTL_SECONDS
        self._clock = clock
        self._namespaces: dict[str, dict[str, CacheEntry]] = {}
        self._lock = threading.Lock()

    def is_expired(self, timestamp: float) -> bool:
        """Return True if the entry is older than the TTL."""
        return self._clock() - timestamp > self.ttl

    def get(self, namespace: str, key: str) -> Optional[Any]:
        """Return the cached object itself, or None if missing/expired."""
        with self._lock:
            entries = self._namespaces.get(namespace)
            entry = entries.get(key) if entries else None
            if entry is None:
                logger.debug("Cache miss", extra={"namespace": namespace, "key": key})
                return None
            if self.is_expired(entry.timestamp):
                entries.pop(key, None)
                logger.debug("Cache entry expired", extra={"namespace": namespace, "key": key})
                return None
            logger.debug("Cache hit", extra={"namespace": namespace, "key": key})
            return entry.data

    def set(self, namespace: str, key: str, data: Any) -> None:
        """Store data stamped with the current time, overwriting any prior entry."""
        with self._lock:
            self._namespaces.setdefault(namespace, {})[key] = CacheEntry(data=data, timestamp=self._clock())

    def peek(self, namespace: str, key: str) -> Optional[CacheEntry]:
        """Return the raw entry, expired or not."""
        with self._lock:
            return self._namespaces.get(namespace, {}).get(key)

    def delete(self, namespace: str, key: str) -> None:
        """Remove an entry if it exists."""
        with self._lock:
            self._namespaces.get(namespace, {}).pop(key, None)

    def size(self, namespace: str) -> int:
        """Number of stored entries in a namespace, including not-yet-read expired ones."""
        with self._lock:
            return len(self._namespaces.get(namespace, {}))

    def clear(self, namespace: Optional[str] = None) -> None:
        """Clear one namespace or all of them."""
        with self._lock:
            if namespace is None:
                self._namespaces.clear()
            else:
                self._namespaces.pop(namespace, None)
