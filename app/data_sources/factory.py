"""Factory helpers for choosing a weather data source at startup."""

from __future__ import annotations

from functools import partial

from app import config
from app.data_sources.base import CallableWeatherDataSource, WeatherDataSource
from app.data_sources.open_meteo_client import (
    fetch_weather_current,
    fetch_weather_forecast,
    search_city,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "open_meteo"


def build_data_source(settings: config.Settings | None = None) -> WeatherDataSource:
    """Instantiate the configured weather data source."""
    settings = settings or config.settings
    source = (settings.data_source or DEFAULT_SOURCE_NAME).lower()

    if source == "open_meteo":
        logger.info(
            "Using Open-Meteo data source",
            extra={"geocoding_url": settings.geocoding_url, "weather_url": settings.weather_url},
        )
        timeout = settings.http_timeout_seconds
        return CallableWeatherDataSource(
            geocode=partial(
                search_city,
                url=settings.geocoding_url,
                language=settings.geocoding_language,
                timeout=timeout,
            ),
            weather_current=partial(fetch_weather_current, url=settings.weather_url, timeout=timeout),
            weather_forecast=partial(fetch_weather_forecast, url=settings.weather_url, timeout=timeout),
        )

    raise ValueError(f"Unknown data source '{source}'")
