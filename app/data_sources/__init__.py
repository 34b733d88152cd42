"""Data source factories for plugging different geocoding/weather backends."""

from .base import CallableWeatherDataSource, WeatherDataSource
from .factory import build_data_source
from .open_meteo_client import (
    CurrentConditions,
    DailyForecast,
    WeatherSnapshot,
    fetch_weather_current,
    fetch_weather_forecast,
    parse_weather_snapshot,
    search_city,
)

__all__ = [
    "build_data_source",
    "WeatherDataSource",
    "CallableWeatherDataSource",
    "CurrentConditions",
    "DailyForecast",
    "WeatherSnapshot",
    "fetch_weather_current",
    "fetch_weather_forecast",
    "parse_weather_snapshot",
    "search_city",
]
