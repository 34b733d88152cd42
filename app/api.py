"""HTTP API for the weather lookup service."""

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from .comparison import average_temperature, coldest, hottest, most_humid, parse_city_list, windiest
from .config import settings
from .data_sources import parse_weather_snapshot
from .errors import WeatherLookupError
from .lookup_service import RecentSearches, build_lookup_service
from .models import CityComparisonEntry, CityWeather, CoordinateResult
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/api")

NOT_FOUND_MESSAGE = "City '{}' not found. Please try again."
NO_CITIES_MESSAGE = "No cities could be resolved."
UPSTREAM_FAILURE_MESSAGE = "Error fetching data. Please try again later."
MAX_CITY_NAME_CHARS = 100

router = APIRouter()
RECENT_SEARCHES = RecentSearches(limit=settings.recent_searches_limit)
SERVICE = build_lookup_service(settings)
SERVICE.add_observer(RECENT_SEARCHES)


class CurrentWeather(BaseModel):
    """Current-conditions fields pulled from the upstream payload."""
    temperature: Optional[float] = None
    apparent_temperature: Optional[float] = None
    relative_humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    weather_code: Optional[int] = None


class DailyWeather(BaseModel):
    """One forecast day."""
    date: str
    temperature_max: Optional[float] = None
    temperature_min: Optional[float] = None
    weather_code: Optional[int] = None


class WeatherResponse(BaseModel):
    """Single-city lookup response."""
    query: str
    location: CoordinateResult
    timezone: Optional[str] = None
    current: Optional[CurrentWeather] = None
    daily: list[DailyWeather] = []
    raw: dict[str, Any]


class CompareResponse(BaseModel):
    """Multi-city comparison with the derived rankings."""
    cities: list[CityComparisonEntry]
    hottest: Optional[CityComparisonEntry] = None
    coldest: Optional[CityComparisonEntry] = None
    average_temperature: Optional[float] = None
    most_humid: Optional[CityComparisonEntry] = None
    windiest: Optional[CityComparisonEntry] = None


class RecentResponse(BaseModel):
    """Recently resolved cities, newest first."""
    cities: list[CoordinateResult]


def _validate_city(city: str) -> str:
    """Trim the query and reject blank or oversized names with a 400."""
    trimmed = city.strip()
    if not trimmed:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please enter a city name.")
    if len(trimmed) > MAX_CITY_NAME_CHARS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail=f"City name too long; limit {MAX_CITY_NAME_CHARS} characters.")
    return trimmed


def _upstream_failure(exc: WeatherLookupError) -> HTTPException:
    """Log the failure and build the generic 'try again later' response."""
    logger.error("Lookup failed: %s", exc)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=UPSTREAM_FAILURE_MESSAGE)


def _to_response(result: CityWeather) -> WeatherResponse:
    """Convert a lookup result into the serialized API shape."""
    snapshot = parse_weather_snapshot(result.weather)
    current = None
    if snapshot.current:
        current = CurrentWeather(
            temperature=snapshot.current.temperature,
            apparent_temperature=snapshot.current.apparent_temperature,
            relative_humidity=snapshot.current.relative_humidity,
            wind_speed=snapshot.current.wind_speed,
            weather_code=snapshot.current.weather_code,
        )
    return WeatherResponse(
        query=result.query,
        location=result.coordinates,
        timezone=snapshot.timezone,
        current=current,
        daily=[
            DailyWeather(
                date=day.date,
                temperature_max=day.temperature_max,
                temperature_min=day.temperature_min,
                weather_code=day.weather_code,
            )
            for day in snapshot.daily
        ],
        raw=result.weather,
    )


@router.get("/weather", response_model=WeatherResponse)
def get_weather(city: str = Query(...)):
    """Current weather for a single city."""
    name = _validate_city(city)
    try:
        result = SERVICE.lookup(name)
    except WeatherLookupError as exc:
        raise _upstream_failure(exc)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE.format(name))
    return _to_response(result)


@router.get("/forecast", response_model=WeatherResponse)
def get_forecast(city: str = Query(...), days: Optional[int] = Query(default=None, ge=1, le=16)):
    """Current weather plus a daily forecast for a single city."""
    name = _validate_city(city)
    try:
        result = SERVICE.lookup_forecast(name, days or settings.forecast_days)
    except WeatherLookupError as exc:
        raise _upstream_failure(exc)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE.format(name))
    return _to_response(result)


@router.get("/compare", response_model=CompareResponse)
def compare_cities(cities: str = Query(...)):
    """Compare current weather across a comma-separated list of cities."""
    names = parse_city_list(cities)
    if not names:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please enter at least one city name.")
    names = [_validate_city(name) for name in names]
    entries = SERVICE.compare(names)
    if not entries:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NO_CITIES_MESSAGE)
    return CompareResponse(
        cities=entries,
        hottest=hottest(entries),
        coldest=coldest(entries),
        average_temperature=average_temperature(entries),
        most_humid=most_humid(entries),
        windiest=windiest(entries),
    )


@router.get("/recent", response_model=RecentResponse)
def recent_searches():
    """Cities resolved by recent single-city lookups."""
    return RecentResponse(cities=[item.coordinates for item in RECENT_SEARCHES.items()])


@router.delete("/cache", status_code=status.HTTP_204_NO_CONTENT)
def reset_cache():
    """Drop all cached coordinates and weather payloads."""
    logger.info("Clearing lookup cache")
    SERVICE.cache.clear()
