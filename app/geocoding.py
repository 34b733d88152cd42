"""Resolve city names to coordinates through the geocoding API, cache first."""
from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from app.cache_store import COORDINATES, CacheStore
from app.data_sources import WeatherDataSource
from app.errors import ParseError
from app.models import CoordinateResult
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/geocoding")


class GeocodingResolver:
    """Turn a city name into a ``CoordinateResult``.

    The city name is used verbatim as the cache key: no trimming, no case
    folding. Lookups that find nothing return None and are never cached, so
    the next call for the same name goes upstream again.
    """

    def __init__(self, cache: CacheStore, data_source: WeatherDataSource) -> None:
        self.cache = cache
        self.data_source = data_source

    def resolve(self, city_name: str) -> Optional[CoordinateResult]:
        """Return the first upstream match for ``city_name`` or None if there is none.

        Raises TransportError, UpstreamError or ParseError when the upstream call fails.
        """
        cached = self.cache.get(COORDINATES, city_name)
        if cached is not None:
            logger.debug("Using cached coordinates for %r", city_name)
            return cached

        data = self.data_source.search_city(city_name)
        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            logger.warning("No city found for %r", city_name)
            return None

        try:
            first = results[0]
            coords = CoordinateResult(
                latitude=first.get("latitude"),
                longitude=first.get("longitude"),
                name=first.get("name"),
                country=first.get("country"),
            )
        except (AttributeError, IndexError, KeyError, TypeError, ValidationError) as exc:
            raise ParseError("geocoding", f"unexpected result shape: {results!r:.200}") from exc

        logger.info(
            "Resolved %r to %s, %s (%s, %s)",
            city_name,
            coords.name,
            coords.country,
            coords.latitude,
            coords.longitude,
        )
        self.cache.set(COORDINATES, city_name, coords)
        return coords
