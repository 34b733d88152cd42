"""Compose the geocoding, weather and comparison layers behind one entry point."""
from __future__ import annotations

import threading
from collections import deque
from typing import Callable, List, Optional, Sequence

from app import cache_manager, config
from app.cache_store import CacheStore
from app.comparison import ComparisonOrchestrator
from app.data_sources import WeatherDataSource, build_data_source
from app.data_sources.open_meteo_client import DEFAULT_FORECAST_DAYS
from app.geocoding import GeocodingResolver
from app.models import CityComparisonEntry, CityWeather
from app.weather import WeatherFetcher
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/lookup_service")

LookupObserver = Callable[[str, CityWeather], None]


class RecentSearches:
    """Bounded, most-recent-first history of successful lookups."""

    def __init__(self, limit: int = 10) -> None:
        self._items: deque[CityWeather] = deque(maxlen=max(1, limit))
        self._lock = threading.Lock()

    @staticmethod
    def _key(result: CityWeather) -> tuple:
        coords = result.coordinates
        return coords.name, coords.country, coords.latitude, coords.longitude

    def __call__(self, city_name: str, result: CityWeather) -> None:
        key = self._key(result)
        with self._lock:
            for item in list(self._items):
                if self._key(item) == key:
                    self._items.remove(item)
            self._items.appendleft(result)

    def items(self) -> List[CityWeather]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class WeatherLookupService:
    """Single-city lookups, forecasts and multi-city comparisons over a shared cache.

    Observers run in registration order after every successful single-city
    lookup. A failing observer is logged and skipped; it never changes the
    lookup result.
    """

    def __init__(
        self,
        cache: CacheStore,
        data_source: WeatherDataSource,
        *,
        max_workers: int = 1,
        observers: Optional[Sequence[LookupObserver]] = None,
    ) -> None:
        self.cache = cache
        self.resolver = GeocodingResolver(cache, data_source)
        self.fetcher = WeatherFetcher(cache, data_source)
        self.orchestrator = ComparisonOrchestrator(self.resolver, self.fetcher, max_workers=max_workers)
        self.observers: List[LookupObserver] = list(observers or [])

    def add_observer(self, observer: LookupObserver) -> None:
        """Register a callback run after each successful lookup."""
        self.observers.append(observer)

    def _notify(self, city_name: str, result: CityWeather) -> None:
        for observer in self.observers:
            try:
                observer(city_name, result)
            except Exception as exc:
                logger.warning("Lookup observer %r failed: %s", observer, exc)

    def lookup(self, city_name: str) -> Optional[CityWeather]:
        """Resolve a city and fetch its current weather; None if the city is unknown."""
        coords = self.resolver.resolve(city_name)
        if coords is None:
            return None
        payload = self.fetcher.fetch(coords.latitude, coords.longitude)
        result = CityWeather(query=city_name, coordinates=coords, weather=payload)
        self._notify(city_name, result)
        return result

    def lookup_forecast(self, city_name: str, days: int = DEFAULT_FORECAST_DAYS) -> Optional[CityWeather]:
        """Like ``lookup`` but with ``days`` of daily aggregates in the payload."""
        coords = self.resolver.resolve(city_name)
        if coords is None:
            return None
        payload = self.fetcher.fetch_forecast(coords.latitude, coords.longitude, days)
        result = CityWeather(query=city_name, coordinates=coords, weather=payload)
        self._notify(city_name, result)
        return result

    def compare(self, city_names: Sequence[str]) -> List[CityComparisonEntry]:
        """Compare current weather across cities; unresolved cities are omitted."""
        return self.orchestrator.compare(city_names)


def build_lookup_service(
    settings: config.Settings | None = None,
    *,
    cache: CacheStore | None = None,
    data_source: WeatherDataSource | None = None,
) -> WeatherLookupService:
    """Wire a lookup service from settings, the shared cache and the configured data source."""
    settings = settings or config.settings
    return WeatherLookupService(
        cache if cache is not None else cache_manager.get_cache(),
        data_source if data_source is not None else build_data_source(settings),
        max_workers=settings.compare_max_workers,
    )
