"""Interfaces and helpers for geocoding/weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol


class WeatherDataSource(Protocol):
    """Interface for anything that can geocode a city and return weather payloads."""

    def search_city(self, name: str) -> dict:
        """Return the raw geocoding document for ``name``."""
        ...

    def fetch_weather_current(self, latitude: float, longitude: float) -> dict:
        """Return the raw current-conditions document."""
        ...

    def fetch_weather_forecast(self, latitude: float, longitude: float, *, forecast_days: int = 5) -> dict:
        """Return the raw document with current conditions and daily aggregates."""
        ...


@dataclass
class CallableWeatherDataSource(WeatherDataSource):
    """Wrap three callables so they can be swapped for different backends."""

    geocode: Callable[..., dict]
    weather_current: Callable[..., dict]
    weather_forecast: Callable[..., dict]

    def search_city(self, *args, **kwargs) -> dict:
        """Delegate to the configured geocoding callable."""
        return self.geocode(*args, **kwargs)

    def fetch_weather_current(self, *args, **kwargs) -> dict:
        """Delegate to the configured current-weather callable."""
        return self.weather_current(*args, **kwargs)

    def fetch_weather_forecast(self, *args, **kwargs) -> dict:
        """Delegate to the configured forecast callable."""
        return self.weather_forecast(*args, **kwargs)
