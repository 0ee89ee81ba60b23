# anjia_properties/storage/property_cache.py

"""In-memory TTL cache for resolved properties and listing pages."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from anjia_properties.config.settings import Settings

logger = logging.getLogger("anjia.cache")

PROPERTY_KIND = "property"
LISTING_KIND = "listing"
CACHE_KINDS: frozenset[str] = frozenset({PROPERTY_KIND, LISTING_KIND})


@dataclass
class CacheEntry:
    """A cached value with its absolute expiry time."""

    key: str
    kind: str
    value: Any
    stored_at: float
    expires_at: float


class PropertyCache:
    """Process-wide key/value store where every entry carries its own TTL.

    Single-property entries are keyed by the exact property id; listing
    entries by :meth:`FilterSet.cache_key`.  The two key spaces cannot
    collide because listing keys are JSON objects.

    There is no size bound: entries only leave through expiry or
    :meth:`clear`.  The clock is injectable so tests can move time.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        property_ttl: float | None = None,
        listing_ttl: float | None = None,
    ) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self.property_ttl: float = (
            property_ttl if property_ttl is not None
            else Settings.PROPERTY_CACHE_TTL
        )
        self.listing_ttl: float = (
            listing_ttl if listing_ttl is not None
            else Settings.LISTING_CACHE_TTL
        )

    def get(self, key: str) -> Any | None:
        """Return the live value for *key*, or ``None``."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            logger.debug("Cache entry expired: %s", key)
            return None
        logger.info("Cache hit for %s", key)
        return entry.value

    def set(
        self,
        key: str,
        value: Any,
        ttl: float,
        kind: str = PROPERTY_KIND,
    ) -> None:
        """Store *value* under *key* for *ttl* seconds (last write wins)."""
        now = self._clock()
        self._entries[key] = CacheEntry(
            key=key,
            kind=kind,
            value=value,
            stored_at=now,
            expires_at=now + ttl,
        )
        logger.info("Cached %s entry %s for %.0fs", kind, key, ttl)

    def set_property(self, property_id: str, value: Any) -> None:
        self.set(property_id, value, self.property_ttl, PROPERTY_KIND)

    def set_listing(self, key: str, value: Any) -> None:
        self.set(key, value, self.listing_ttl, LISTING_KIND)

    def clear(self, kind: str = "all") -> int:
        """Purge entries of *kind* (``"all"``, ``"property"``, ``"listing"``).

        Returns the number of entries removed.
        """
        if kind == "all":
            count = len(self._entries)
            self._entries.clear()
        else:
            doomed = [k for k, e in self._entries.items() if e.kind == kind]
            for key in doomed:
                del self._entries[key]
            count = len(doomed)
        logger.info("Cache purged (%s): %d entries removed", kind, count)
        return count

    def evict_expired(self) -> int:
        """Drop every expired entry and return how many went."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if now >= e.expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Evicted %d expired cache entries", len(expired))
        return len(expired)

    def stats(self) -> dict[str, Any]:
        """Entry counts per kind, split into live and expired."""
        now = self._clock()
        summary: dict[str, Any] = {"total": len(self._entries)}
        for kind in sorted(CACHE_KINDS):
            entries = [e for e in self._entries.values() if e.kind == kind]
            live = sum(1 for e in entries if now < e.expires_at)
            summary[kind] = {
                "entries": len(entries),
                "live": live,
                "expired": len(entries) - live,
            }
        return summary

    def __len__(self) -> int:
        return len(self._entries)
