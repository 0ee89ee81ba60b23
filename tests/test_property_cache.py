# tests/test_property_cache.py

"""Tests for the TTL property cache with an injected clock."""

import unittest

from anjia_properties.storage.property_cache import (
    LISTING_KIND,
    PROPERTY_KIND,
    PropertyCache,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestPropertyCache(unittest.TestCase):
    """Tests for PropertyCache expiry, clearing and stats."""

    def setUp(self) -> None:
        self.clock = FakeClock()
        self.cache = PropertyCache(
            clock=self.clock, property_ttl=600, listing_ttl=300
        )

    def test_miss_returns_none(self) -> None:
        """Unknown keys return None."""
        self.assertIsNone(self.cache.get("nope"))

    def test_hit_within_ttl(self) -> None:
        """Entries are returned before their TTL elapses."""
        self.cache.set_property("42", "value")
        self.clock.advance(599)
        self.assertEqual(self.cache.get("42"), "value")

    def test_expires_after_ttl(self) -> None:
        """Entries vanish once their TTL elapses."""
        self.cache.set_property("42", "value")
        self.clock.advance(600)
        self.assertIsNone(self.cache.get("42"))
        self.assertEqual(len(self.cache), 0)

    def test_listing_ttl_is_shorter(self) -> None:
        """Listing entries expire before property entries."""
        self.cache.set_property("p", 1)
        self.cache.set_listing("l", 2)
        self.clock.advance(301)
        self.assertEqual(self.cache.get("p"), 1)
        self.assertIsNone(self.cache.get("l"))

    def test_last_write_wins(self) -> None:
        """Setting a key again replaces its value."""
        self.cache.set("k", "old", 10)
        self.cache.set("k", "new", 10)
        self.assertEqual(self.cache.get("k"), "new")

    def test_defaults_from_settings(self) -> None:
        """TTLs default to the Settings values."""
        cache = PropertyCache()
        self.assertEqual(cache.property_ttl, 600.0)
        self.assertEqual(cache.listing_ttl, 300.0)

    def test_clear_by_kind(self) -> None:
        """Clearing one kind leaves the other."""
        self.cache.set_property("p1", 1)
        self.cache.set_property("p2", 2)
        self.cache.set_listing("l1", 3)
        self.assertEqual(self.cache.clear(LISTING_KIND), 1)
        self.assertEqual(len(self.cache), 2)
        self.assertEqual(self.cache.clear(PROPERTY_KIND), 2)
        self.assertEqual(len(self.cache), 0)

    def test_clear_all(self) -> None:
        """Clearing everything empties the cache."""
        self.cache.set_property("p", 1)
        self.cache.set_listing("l", 2)
        self.assertEqual(self.cache.clear(), 2)
        self.assertEqual(len(self.cache), 0)

    def test_evict_expired(self) -> None:
        """evict_expired drops only expired entries."""
        self.cache.set_property("p", 1)
        self.cache.set_listing("l", 2)
        self.clock.advance(400)
        self.assertEqual(self.cache.evict_expired(), 1)
        self.assertEqual(len(self.cache), 1)

    def test_stats(self) -> None:
        """Stats split entries per kind into live and expired."""
        self.cache.set_property("p", 1)
        self.cache.set_listing("l", 2)
        self.clock.advance(400)
        stats = self.cache.stats()
        self.assertEqual(stats["total"], 2)
        self.assertEqual(stats["property"], {"entries": 1, "live": 1, "expired": 0})
        self.assertEqual(stats["listing"], {"entries": 1, "live": 0, "expired": 1})


if __name__ == "__main__":
    unittest.main()
