"""Fetch weather payloads for coordinates, cache first."""
from __future__ import annotations

from app.cache_store import FORECAST, WEATHER, CacheStore
from app.data_sources import WeatherDataSource
from app.data_sources.open_meteo_client import DEFAULT_FORECAST_DAYS
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/weather")


def coordinate_key(latitude: float, longitude: float) -> str:
    """Render the weather cache key, e.g. ``"-23.5505,-46.6333"``."""
    return f"{float(latitude)},{float(longitude)}"


class WeatherFetcher:
    """Fetch current (and optionally daily) weather for a coordinate pair.

    Payloads are cached by coordinates rather than by city name, so two
    spellings that resolve to the same point share one entry. The returned
    dict is the cached object itself; treat it as read-only.
    """

    def __init__(self, cache: CacheStore, data_source: WeatherDataSource) -> None:
        self.cache = cache
        self.data_source = data_source

    def fetch(self, latitude: float, longitude: float) -> dict:
        """Return the current-conditions payload. Never returns None."""
        key = coordinate_key(latitude, longitude)
        cached = self.cache.get(WEATHER, key)
        if cached is not None:
            logger.debug("Using cached weather for %s", key)
            return cached

        data = self.data_source.fetch_weather_current(latitude, longitude)
        logger.info("Fetched current weather for %s", key)
        self.cache.set(WEATHER, key, data)
        return data

    def fetch_forecast(self, latitude: float, longitude: float, days: int = DEFAULT_FORECAST_DAYS) -> dict:
        """Return current conditions plus ``days`` of daily aggregates."""
        key = f"{coordinate_key(latitude, longitude)},{days}"
        cached = self.cache.get(FORECAST, key)
        if cached is not None:
            logger.debug("Using cached forecast for %s", key)
            return cached

        data = self.data_source.fetch_weather_forecast(latitude, longitude, forecast_days=days)
        logger.info("Fetched %d-day forecast for %s", days, key)
        self.cache.set(FORECAST, key, data)
        return data
