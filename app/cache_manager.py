"""Process-wide cache instance composed at the application's top level."""

from app.cache_store import InMemoryCacheStore, CacheStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_manager")


def _init_store() -> CacheStore:
    """Initialize the backing cache store."""
    logger.debug("Initializing in-memory lookup cache")
    return InMemoryCacheStore()


_store: CacheStore = _init_store()


def get_cache() -> CacheStore:
    """Return the shared cache store."""
    return _store


def use_fresh_store_for_tests(clock=None) -> CacheStore:
    """Swap in an empty store (optionally with a fake clock) for test isolation."""
    global _store
    _store = InMemoryCacheStore(clock=clock) if clock else InMemoryCacheStore()
    return _store

