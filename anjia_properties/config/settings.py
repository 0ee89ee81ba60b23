# anjia_properties/config/settings.py

"""Central configuration for the anjia property data service."""

import os
from pathlib import Path
from urllib.parse import urlsplit

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _origin(url: str) -> str:
    """Return ``scheme://host[:port]`` for *url*."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


class Settings:
    """Central configuration for the anjia property data service."""

    # --- CMS hosts ---
    CMS_PRIMARY_URL: str = os.getenv(
        "WORDPRESS_API_URL", "https://wp.ajyxn.com/wp-json"
    ).rstrip("/")
    CMS_MIRROR_URL: str = os.getenv(
        "WORDPRESS_FALLBACK_API_URL", "http://199.188.200.71/wp-json"
    ).rstrip("/")
    CMS_PUBLIC_HOST: str = os.getenv(
        "CMS_PUBLIC_HOST", _origin(CMS_PRIMARY_URL)
    ).rstrip("/")

    # --- Resilience ---
    LISTING_TIMEOUT: float = 5.0        # Seconds per listing attempt
    SINGLE_TIMEOUT: float = 15.0        # Seconds per single-item attempt
    MAX_ATTEMPTS: int = 2               # First try + one retry
    BACKOFF_BASE: float = 0.5           # Doubles on every retry
    HEALTH_TIMEOUT: float = 10.0        # Seconds per health probe
    HEALTH_SLOW_MS: float = 5000.0      # Latency above this is "slow"

    # --- Cache ---
    PROPERTY_CACHE_TTL: float = 600.0   # Single-item entries (secs)
    LISTING_CACHE_TTL: float = 300.0    # Listing entries (secs)

    # --- Pagination ---
    LISTING_PAGE_SIZE: int = 12
    LATEST_PAGE_SIZE: int = 6

    # --- Canonical defaults ---
    PLACEHOLDER_IMAGE: str = "/images/properties/property-placeholder.jpg"
    DEFAULT_AMENITIES: tuple[str, ...] = (
        "WiFi",
        "Parking",
        "Security",
        "Air Conditioning",
    )
    DEFAULT_AGENT: dict[str, str] = {
        "id": "agent-1",
        "name": "John Doe",
        "email": "john.doe@example.com",
        "phone": "+256 701 234 567",
        "company": "An Jia You Xuan Real Estate",
    }

    # --- HTTP client ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "anjia_properties" / "config"
    STATIC_DATASET_PATH: Path = DATA_DIR / "static_properties.json"
    FALLBACK_CATALOG_PATH: Path = DATA_DIR / "fallback_catalog.json"
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Sources (registry, resolved by dotted path) ---
    AVAILABLE_SOURCES: list[dict[str, str]] = [
        {
            "id": "primary_cms",
            "label": "Primary CMS",
            "source": "anjia_properties.sources.cms_source.PrimaryCmsSource",
        },
        {
            "id": "mirror_cms",
            "label": "Mirror CMS",
            "source": "anjia_properties.sources.cms_source.MirrorCmsSource",
        },
        {
            "id": "static",
            "label": "Static dataset",
            "source": "anjia_properties.sources.static_source.StaticDatasetSource",
        },
        {
            "id": "fallback",
            "label": "Fallback catalog",
            "source": "anjia_properties.sources.fallback_catalog.FallbackCatalogSource",
        },
    ]

    # Fallback priority, first entry is tried first
    SINGLE_ITEM_CHAIN: list[str] = ["primary_cms", "static", "fallback"]
    LISTING_CHAIN: list[str] = ["primary_cms", "mirror_cms", "static"]
