import unittest

from app.cache_store import CACHE_TTL_SECONDS, COORDINATES, WEATHER
from app.cache_store.memory import InMemoryCacheStore


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


SAO_PAULO = {"latitude": -23.5505, "longitude": -46.6333, "name": "São Paulo", "country": "Brasil"}


class TestInMemoryCacheStore(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.store = InMemoryCacheStore(clock=self.clock)

    def test_ttl_is_ten_minutes(self):
        self.assertEqual(CACHE_TTL_SECONDS, 600)
        self.assertEqual(self.store.ttl, 600)

    def test_missing_key_returns_none(self):
        self.assertIsNone(self.store.get(COORDINATES, "Nowhere"))

    def test_get_returns_same_object(self):
        self.store.set(COORDINATES, "São Paulo", SAO_PAULO)
        self.assertIs(self.store.get(COORDINATES, "São Paulo"), SAO_PAULO)

    def test_expired_entry_is_removed_on_read(self):
        self.store.set(COORDINATES, "São Paulo", SAO_PAULO)
        self.clock.advance(11 * 60)
        self.assertIsNone(self.store.get(COORDINATES, "São Paulo"))
        self.assertIsNone(self.store.peek(COORDINATES, "São Paulo"))
        self.assertEqual(self.store.size(COORDINATES), 0)

    def test_entry_valid_just_inside_ttl(self):
        self.store.set(COORDINATES, "São Paulo", SAO_PAULO)
        self.clock.advance(CACHE_TTL_SECONDS - 0.001)
        self.assertEqual(self.store.get(COORDINATES, "São Paulo"), SAO_PAULO)

    def test_entry_valid_at_exact_ttl(self):
        self.store.set(COORDINATES, "São Paulo", SAO_PAULO)
        self.clock.advance(CACHE_TTL_SECONDS)
        self.assertIsNotNone(self.store.get(COORDINATES, "São Paulo"))

    def test_entry_expires_just_past_ttl(self):
        self.store.set(COORDINATES, "São Paulo", SAO_PAULO)
        self.clock.advance(CACHE_TTL_SECONDS + 0.001)
        self.assertIsNone(self.store.get(COORDINATES, "São Paulo"))

    def test_five_minute_old_entry_still_served(self):
        self.store.set(COORDINATES, "São Paulo", SAO_PAULO)
        self.clock.advance(5 * 60)
        self.assertEqual(self.store.get(COORDINATES, "São Paulo")["latitude"], -23.5505)

    def test_set_overwrites_and_restamps(self):
        self.store.set(WEATHER, "1.0,2.0", {"v": 1})
        self.clock.advance(500)
        self.store.set(WEATHER, "1.0,2.0", {"v": 2})
        self.clock.advance(500)
        self.assertEqual(self.store.get(WEATHER, "1.0,2.0"), {"v": 2})
        self.assertEqual(self.store.peek(WEATHER, "1.0,2.0").timestamp, self.clock.now - 500)

    def test_namespaces_are_independent(self):
        self.store.set(COORDINATES, "x", "coords")
        self.store.set(WEATHER, "x", "weather")
        self.assertEqual(self.store.get(COORDINATES, "x"), "coords")
        self.assertEqual(self.store.get(WEATHER, "x"), "weather")

    def test_keys_are_not_normalized(self):
        self.store.set(COORDINATES, "São Paulo", SAO_PAULO)
        self.assertIsNone(self.store.get(COORDINATES, "são paulo"))
        self.assertIsNone(self.store.get(COORDINATES, " São Paulo "))

    def test_is_expired(self):
        self.assertFalse(self.store.is_expired(self.clock.now - 60))
        self.assertTrue(self.store.is_expired(self.clock.now - 11 * 60))

    def test_delete_and_clear(self):
        self.store.set(COORDINATES, "a", 1)
        self.store.set(COORDINATES, "b", 2)
        self.store.set(WEATHER, "c", 3)
        self.store.delete(COORDINATES, "a")
        self.store.delete(COORDINATES, "missing")
        self.assertEqual(self.store.size(COORDINATES), 1)

        self.store.clear(COORDINATES)
        self.assertEqual(self.store.size(COORDINATES), 0)
        self.assertEqual(self.store.size(WEATHER), 1)

        self.store.clear()
        self.assertEqual(self.store.size(WEATHER), 0)

    def test_peek_does_not_expire(self):
        self.store.set(COORDINATES, "a", 1)
        self.clock.advance(CACHE_TTL_SECONDS + 1)
        entry = self.store.peek(COORDINATES, "a")
        self.assertIsNotNone(entry)
        self.assertEqual(entry.data, 1)


if __name__ == "__main__":
    unittest.main()
