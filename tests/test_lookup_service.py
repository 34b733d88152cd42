import unittest

from app.cache_store import COORDINATES, WEATHER, InMemoryCacheStore
from app.config import Settings
from app.data_sources.base import CallableWeatherDataSource
from app.errors import UpstreamError
from app.lookup_service import RecentSearches, WeatherLookupService, build_lookup_service
from app.models import CityWeather, CoordinateResult


def _geocode(name):
    if name == "São Paulo":
        return {"results": [{"latitude": -23.5505, "longitude": -46.6333, "name": "São Paulo", "country": "Brasil"}]}
    if name == "Lisboa":
        return {"results": [{"latitude": 38.7167, "longitude": -9.1333, "name": "Lisboa", "country": "Portugal"}]}
    return {"results": []}


def _weather(latitude, longitude):
    return {"latitude": latitude, "longitude": longitude, "timezone": "auto", "current": {"temperature_2m": 25.0}}


def _forecast(latitude, longitude, forecast_days=5):
    payload = _weather(latitude, longitude)
    payload["daily"] = {"time": [f"2026-02-{8 + i:02d}" for i in range(forecast_days)]}
    return payload


def _service(**kwargs):
    cache = InMemoryCacheStore()
    ds = CallableWeatherDataSource(geocode=_geocode, weather_current=_weather, weather_forecast=_forecast)
    return WeatherLookupService(cache, ds, **kwargs)


def _result(name, latitude=0.0, longitude=0.0, country=None):
    return CityWeather(
        query=name,
        coordinates=CoordinateResult(latitude=latitude, longitude=longitude, name=name, country=country),
        weather={},
    )


class TestWeatherLookupService(unittest.TestCase):
    def test_lookup_resolves_then_fetches(self):
        service = _service()

        result = service.lookup("São Paulo")

        self.assertEqual(result.query, "São Paulo")
        self.assertEqual(result.coordinates.country, "Brasil")
        self.assertEqual(result.weather["current"]["temperature_2m"], 25.0)
        self.assertIsNotNone(service.cache.get(COORDINATES, "São Paulo"))
        self.assertIsNotNone(service.cache.get(WEATHER, "-23.5505,-46.6333"))

    def test_lookup_unknown_city_returns_none(self):
        self.assertIsNone(_service().lookup("Nonexistent123"))

    def test_lookup_errors_propagate(self):
        def failing_weather(latitude, longitude):
            raise UpstreamError("weather", 500)

        ds = CallableWeatherDataSource(geocode=_geocode, weather_current=failing_weather, weather_forecast=_forecast)
        service = WeatherLookupService(InMemoryCacheStore(), ds)

        with self.assertRaises(UpstreamError):
            service.lookup("São Paulo")

    def test_lookup_forecast_returns_daily(self):
        result = _service().lookup_forecast("Lisboa", 3)
        self.assertEqual(len(result.weather["daily"]["time"]), 3)

    def test_observers_run_in_order_after_success(self):
        calls = []
        service = _service(observers=[lambda name, result: calls.append(("first", name))])
        service.add_observer(lambda name, result: calls.append(("second", result.coordinates.name)))

        service.lookup("São Paulo")

        self.assertEqual(calls, [("first", "São Paulo"), ("second", "São Paulo")])

    def test_observers_not_run_when_city_not_found(self):
        calls = []
        service = _service(observers=[lambda name, result: calls.append(name)])

        service.lookup("Nonexistent123")

        self.assertEqual(calls, [])

    def test_failing_observer_does_not_break_lookup(self):
        calls = []

        def broken(name, result):
            raise RuntimeError("boom")

        service = _service(observers=[broken, lambda name, result: calls.append(name)])

        result = service.lookup("Lisboa")

        self.assertIsNotNone(result)
        self.assertEqual(calls, ["Lisboa"])

    def test_compare_delegates_to_orchestrator(self):
        entries = _service().compare(["São Paulo", "Nonexistent123", "Lisboa"])
        self.assertEqual([e.city for e in entries], ["São Paulo", "Lisboa"])

    def test_build_lookup_service_uses_given_cache_and_settings(self):
        cache = InMemoryCacheStore()
        ds = CallableWeatherDataSource(geocode=_geocode, weather_current=_weather, weather_forecast=_forecast)

        service = build_lookup_service(Settings(compare_max_workers=4), cache=cache, data_source=ds)

        self.assertIs(service.cache, cache)
        self.assertEqual(service.orchestrator.max_workers, 4)
        service.lookup("Lisboa")
        self.assertIsNotNone(cache.get(COORDINATES, "Lisboa"))


class TestRecentSearches(unittest.TestCase):
    def test_most_recent_first_and_deduplicated(self):
        recent = RecentSearches(limit=5)
        recent("a", _result("A"))
        recent("b", _result("B"))
        recent("a", _result("A"))

        self.assertEqual([r.coordinates.name for r in recent.items()], ["A", "B"])

    def test_same_name_different_places_are_kept(self):
        recent = RecentSearches(limit=5)
        recent("Springfield", _result("Springfield", 39.78, -89.65, "United States"))
        recent("Springfield", _result("Springfield", 37.21, -93.29, "United States"))

        self.assertEqual([r.coordinates.latitude for r in recent.items()], [37.21, 39.78])

    def test_limit_is_enforced(self):
        recent = RecentSearches(limit=2)
        for name in ["A", "B", "C"]:
            recent(name, _result(name))

        self.assertEqual([r.coordinates.name for r in recent.items()], ["C", "B"])

    def test_clear(self):
        recent = RecentSearches()
        recent("a", _result("A"))
        recent.clear()
        self.assertEqual(recent.items(), [])


if __name__ == "__main__":
    unittest.main()
