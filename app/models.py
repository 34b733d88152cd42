"""Pydantic models for resolved cities and comparison rows."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CoordinateResult(BaseModel):
    """Location resolved by the geocoding API (first match only)."""
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    name: str
    country: Optional[str] = None


class CityComparisonEntry(BaseModel):
    """Normalized per-city summary used to rank cities against each other."""
    model_config = ConfigDict(populate_by_name=True)

    city: str
    temperature: Optional[float] = None
    feels_like: Optional[float] = Field(default=None, alias="feelsLike")
    humidity: Optional[float] = None
    wind_speed: Optional[float] = Field(default=None, alias="windSpeed")
    latitude: float
    longitude: float


class CityWeather(BaseModel):
    """Result of a single-city lookup: where it is and the raw weather document."""
    query: str
    coordinates: CoordinateResult
    weather: dict[str, Any]
