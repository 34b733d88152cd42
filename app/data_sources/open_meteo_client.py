"""Helpers for geocoding cities and fetching weather from the Open-Meteo APIs."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests

from app.errors import ParseError, TransportError, UpstreamError
from utils.logging_utils import describe_request, get_tagged_logger
logger = get_tagged_logger(__name__, tag='open_meteo_client')

session = requests.Session()

OPEN_METEO_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
OPEN_METEO_WEATHER_URL = "https://api.open-meteo.com/v1/forecast"

# Do not add pressure or uv_index here; the "current" block rejects them with a 400.
CURRENT_VARS = [
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "weather_code",
    "wind_speed_10m",
]

DAILY_VARS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "weathercode",
]

DEFAULT_FORECAST_DAYS = 5


@dataclass
class CurrentConditions:
    """Current-conditions fields read from an Open-Meteo payload."""
    temperature: Optional[float]
    relative_humidity: Optional[float]
    apparent_temperature: Optional[float]
    weather_code: Optional[int]
    wind_speed: Optional[float]


@dataclass
class DailyForecast:
    """One day of aggregated forecast values."""
    date: str
    temperature_max: Optional[float]
    temperature_min: Optional[float]
    weather_code: Optional[int]


@dataclass
class WeatherSnapshot:
    """Typed projection of a weather payload; the raw document stays untouched."""
    latitude: Optional[float]
    longitude: Optional[float]
    timezone: Optional[str]
    current: Optional[CurrentConditions]
    daily: List[DailyForecast] = field(default_factory=list)


def _get_json(url: str, params: dict, *, timeout: float | None, context: str) -> Any:
    """GET ``url`` and decode the JSON body, mapping failures onto the lookup errors."""
    logger.debug("Open-Meteo request (%s): %s", context, describe_request(url, params))
    try:
        resp = session.get(url, params=params, timeout=timeout)
    except requests.exceptions.RequestException as exc:
        logger.error("Open-Meteo %s request failed: %s", context, exc)
        raise TransportError(url, str(exc)) from exc

    if not resp.ok:
        logger.error(
            "Open-Meteo %s returned status %s: %s",
            context,
            resp.status_code,
            (resp.text or "")[:200],
        )
        raise UpstreamError(url, resp.status_code, resp.reason)

    try:
        return resp.json()
    except ValueError as exc:
        logger.error("Open-Meteo %s returned a non-JSON body", context)
        raise ParseError(url, resp.text or "") from exc


def search_city(
    name: str,
    *,
    url: str = OPEN_METEO_GEOCODING_URL,
    language: str = "pt",
    timeout: float | None = None,
) -> dict:
    """Query the geocoding API for ``name``, asking for the single best match."""
    params = {
        "name": name,
        "count": 1,
        "language": language,
        "format": "json",
    }
    return _get_json(url, params, timeout=timeout, context="geocoding")


def fetch_weather_current(
    latitude: float,
    longitude: float,
    *,
    url: str = OPEN_METEO_WEATHER_URL,
    timeout: float | None = None,
) -> dict:
    """Fetch current conditions for the given coordinates."""
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_VARS),
        "timezone": "auto",
    }
    return _get_json(url, params, timeout=timeout, context="weather_current")


def fetch_weather_forecast(
    latitude: float,
    longitude: float,
    *,
    forecast_days: int = DEFAULT_FORECAST_DAYS,
    url: str = OPEN_METEO_WEATHER_URL,
    timeout: float | None = None,
) -> dict:
    """Fetch current conditions plus ``forecast_days`` of daily aggregates."""
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_VARS),
        "daily": ",".join(DAILY_VARS),
        "forecast_days": forecast_days,
        "timezone": "auto",
    }
    return _get_json(url, params, timeout=timeout, context="weather_forecast")


def _column(values: Any, i: int) -> Any:
    """Return values[i], or None if the column is missing or short."""
    if not isinstance(values, list) or i >= len(values):
        return None
    return values[i]


def parse_weather_snapshot(payload: dict) -> WeatherSnapshot:
    """Project the fields we read out of a weather payload. Missing fields become None."""
    current_raw = payload.get("current")
    current = None
    if isinstance(current_raw, dict):
        current = CurrentConditions(
            temperature=current_raw.get("temperature_2m"),
            relative_humidity=current_raw.get("relative_humidity_2m"),
            apparent_temperature=current_raw.get("apparent_temperature"),
            weather_code=current_raw.get("weather_code"),
            wind_speed=current_raw.get("wind_speed_10m"),
        )

    daily: List[DailyForecast] = []
    daily_raw = payload.get("daily")
    if isinstance(daily_raw, dict):
        times = daily_raw.get("time") or []
        for i, day in enumerate(times):
            daily.append(
                DailyForecast(
                    date=day,
                    temperature_max=_column(daily_raw.get("temperature_2m_max"), i),
                    temperature_min=_column(daily_raw.get("temperature_2m_min"), i),
                    weather_code=_column(daily_raw.get("weathercode"), i),
                )
            )

    return WeatherSnapshot(
        latitude=payload.get("latitude"),
        longitude=payload.get("longitude"),
        timezone=payload.get("timezone"),
        current=current,
        daily=daily,
    )
