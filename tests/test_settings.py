# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from anjia_properties.config.settings import Settings, _origin


class TestSettings(unittest.TestCase):
    """Verify Settings constants, chains and the source registry."""

    def test_single_item_timeout_longer_than_listing(self) -> None:
        """Single lookups get the longer per-attempt budget."""
        self.assertEqual(Settings.LISTING_TIMEOUT, 5.0)
        self.assertEqual(Settings.SINGLE_TIMEOUT, 15.0)

    def test_at_least_one_retry(self) -> None:
        """Networked sources get at least one retry."""
        self.assertGreaterEqual(Settings.MAX_ATTEMPTS, 2)
        self.assertGreater(Settings.BACKOFF_BASE, 0)

    def test_property_ttl_outlives_listing_ttl(self) -> None:
        """Single properties are cached longer than listings."""
        self.assertGreater(
            Settings.PROPERTY_CACHE_TTL, Settings.LISTING_CACHE_TTL
        )

    def test_page_sizes(self) -> None:
        """Listing pages hold 12 items and widgets 6."""
        self.assertEqual(Settings.LISTING_PAGE_SIZE, 12)
        self.assertEqual(Settings.LATEST_PAGE_SIZE, 6)

    def test_each_source_has_required_keys(self) -> None:
        """Every source must have id, label, and source keys."""
        for src in Settings.AVAILABLE_SOURCES:
            with self.subTest(src=src.get("id", "?")):
                self.assertIn("id", src)
                self.assertIn("label", src)
                self.assertIn("source", src)

    def test_source_ids_are_unique(self) -> None:
        """No two registered sources share an id."""
        ids = [s["id"] for s in Settings.AVAILABLE_SOURCES]
        self.assertEqual(len(ids), len(set(ids)))

    def test_chains_reference_registered_sources(self) -> None:
        """Chains only name registered sources."""
        source_ids = {s["id"] for s in Settings.AVAILABLE_SOURCES}
        for chain in (Settings.SINGLE_ITEM_CHAIN, Settings.LISTING_CHAIN):
            for source_id in chain:
                self.assertIn(source_id, source_ids)

    def test_chain_order(self) -> None:
        """Single-item and listing chains use their fallback order."""
        self.assertEqual(
            Settings.SINGLE_ITEM_CHAIN, ["primary_cms", "static", "fallback"]
        )
        self.assertEqual(
            Settings.LISTING_CHAIN, ["primary_cms", "mirror_cms", "static"]
        )

    def test_cms_urls_have_no_trailing_slash(self) -> None:
        """CMS base URLs end without a slash."""
        self.assertFalse(Settings.CMS_PRIMARY_URL.endswith("/"))
        self.assertFalse(Settings.CMS_MIRROR_URL.endswith("/"))

    def test_path_constants_are_paths(self) -> None:
        """Path settings are Path objects."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.DATA_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_bundled_datasets_exist(self) -> None:
        """Both bundled JSON datasets ship with the package."""
        self.assertTrue(Settings.STATIC_DATASET_PATH.exists())
        self.assertTrue(Settings.FALLBACK_CATALOG_PATH.exists())

    def test_default_headers_ask_for_json(self) -> None:
        """Default headers accept JSON."""
        self.assertEqual(
            Settings.DEFAULT_HEADERS["Accept"], "application/json"
        )

    def test_origin_strips_path(self) -> None:
        """_origin keeps only scheme and host."""
        self.assertEqual(
            _origin("https://wp.ajyxn.com/wp-json"), "https://wp.ajyxn.com"
        )
        self.assertEqual(
            _origin("http://10.0.0.1:8080/wp-json/"), "http://10.0.0.1:8080"
        )


if __name__ == "__main__":
    unittest.main()
