"""Compare current weather across several cities.

Each city is resolved independently (geocoding, then weather). A city that is
not found, or whose lookup fails, is left out of the result instead of
failing the whole batch. The ranking helpers below scan left to right with
strict comparisons, so on ties the city that came first in the input wins.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from app.data_sources.open_meteo_client import parse_weather_snapshot
from app.errors import WeatherLookupError
from app.geocoding import GeocodingResolver
from app.models import CityComparisonEntry
from app.weather import WeatherFetcher
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/comparison")


def parse_city_list(text: str) -> List[str]:
    """Split a comma-separated query into trimmed, non-empty city names."""
    return [part.strip() for part in (text or "").split(",") if part.strip()]


class ComparisonOrchestrator:
    """Resolve many cities and build one ``CityComparisonEntry`` per success."""

    def __init__(self, resolver: GeocodingResolver, fetcher: WeatherFetcher, max_workers: int = 1) -> None:
        self.resolver = resolver
        self.fetcher = fetcher
        self.max_workers = max(1, max_workers)

    def _compare_one(self, city_name: str) -> Optional[CityComparisonEntry]:
        """Resolve a single city, returning None if it should be omitted."""
        try:
            coords = self.resolver.resolve(city_name)
            if coords is None:
                logger.info("Skipping %r: city not found", city_name)
                return None
            payload = self.fetcher.fetch(coords.latitude, coords.longitude)
            current = parse_weather_snapshot(payload).current
            return CityComparisonEntry(
                city=coords.name,
                temperature=current.temperature if current else None,
                feels_like=current.apparent_temperature if current else None,
                humidity=current.relative_humidity if current else None,
                wind_speed=current.wind_speed if current else None,
                latitude=coords.latitude,
                longitude=coords.longitude,
            )
        except WeatherLookupError as exc:
            logger.warning("Skipping %r: %s", city_name, exc)
        except ValidationError as exc:
            logger.warning("Skipping %r: unexpected weather payload (%d errors)", city_name, exc.error_count())
        return None

    def compare(self, city_names: Sequence[str]) -> List[CityComparisonEntry]:
        """Return entries for every city that resolved, in input order.

        An empty list means no city could be resolved.
        """
        names = list(city_names)
        if self.max_workers > 1 and len(names) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                results = list(pool.map(self._compare_one, names))
        else:
            results = [self._compare_one(name) for name in names]

        entries = [entry for entry in results if entry is not None]
        logger.info("Compared %d of %d cities", len(entries), len(names))
        return entries


def _pick(
    entries: Iterable[CityComparisonEntry],
    value: Callable[[CityComparisonEntry], Optional[float]],
    better: Callable[[float, float], bool],
) -> Optional[CityComparisonEntry]:
    """Left-to-right reduction; an entry replaces the best only if strictly better."""
    best = None
    best_value = None
    for entry in entries:
        v = value(entry)
        if v is None:
            continue
        if best is None or better(v, best_value):
            best, best_value = entry, v
    return best


def hottest(entries: Sequence[CityComparisonEntry]) -> Optional[CityComparisonEntry]:
    return _pick(entries, lambda e: e.temperature, lambda a, b: a > b)


def coldest(entries: Sequence[CityComparisonEntry]) -> Optional[CityComparisonEntry]:
    return _pick(entries, lambda e: e.temperature, lambda a, b: a < b)


def most_humid(entries: Sequence[CityComparisonEntry]) -> Optional[CityComparisonEntry]:
    return _pick(entries, lambda e: e.humidity, lambda a, b: a > b)


def windiest(entries: Sequence[CityComparisonEntry]) -> Optional[CityComparisonEntry]:
    return _pick(entries, lambda e: e.wind_speed, lambda a, b: a > b)


def average_temperature(entries: Sequence[CityComparisonEntry]) -> Optional[float]:
    """Mean temperature over entries that report one; None if none do."""
    temps = [e.temperature for e in entries if e.temperature is not None]
    if not temps:
        return None
    return sum(temps) / len(temps)
