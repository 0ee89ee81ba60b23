# anjia_properties/services/resolution_pipeline.py

"""Resolve single properties and listing pages through ordered source chains."""

import importlib
import logging
from typing import Any

from anjia_properties.config.settings import Settings
from anjia_properties.errors.exceptions import SourceError
from anjia_properties.filters.property_filter import PropertyFilter
from anjia_properties.models.filter_set import FilterSet
from anjia_properties.models.property import Property
from anjia_properties.models.raw_record import RawPage
from anjia_properties.models.results import (
    ListingResult,
    PropertyResolution,
    SourceTag,
)
from anjia_properties.normalize.normalizer import minimal_property, normalize
from anjia_properties.services.resilience import resilient_call
from anjia_properties.sources.base_source import BaseSource
from anjia_properties.storage.property_cache import PropertyCache

logger = logging.getLogger("anjia.pipeline")


def load_source_class(dotted_path: str) -> type[Any]:
    """Dynamically import a source adapter class from its dotted path."""
    module_path, class_name = dotted_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls: type[Any] = getattr(module, class_name)
    return cls


def build_sources(
    chain: list[str],
    settings: Settings,
    registry: dict[str, BaseSource] | None = None,
) -> list[BaseSource]:
    """Instantiate the adapters named in *chain*, in order.

    *registry* memoises instances so one adapter (and its HTTP session)
    is shared by every chain that names it.
    """
    registry = registry if registry is not None else {}
    by_id = {s["id"]: s for s in settings.AVAILABLE_SOURCES}
    sources: list[BaseSource] = []
    for source_id in chain:
        if source_id not in registry:
            entry = by_id.get(source_id)
            if entry is None:
                raise KeyError(f"Unknown source id in chain: {source_id}")
            source_cls = load_source_class(entry["source"])
            registry[source_id] = source_cls(settings=settings)
        sources.append(registry[source_id])
    return sources


def _describe_failure(source: BaseSource, exc: BaseException) -> str:
    return f"{source.source_id}: {type(exc).__name__}: {exc}"


class ResolutionPipeline:
    """Cache first, then each source in priority order, then a synthetic result.

    Adapter failures of any kind are logged and absorbed; callers always
    get a renderable result.  Synthetic results are never cached, so the
    next request tries the real sources again.
    """

    def __init__(
        self,
        cache: PropertyCache | None = None,
        settings: Settings | None = None,
        single_sources: list[BaseSource] | None = None,
        listing_sources: list[BaseSource] | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.cache = cache or PropertyCache(
            property_ttl=self.settings.PROPERTY_CACHE_TTL,
            listing_ttl=self.settings.LISTING_CACHE_TTL,
        )
        registry: dict[str, BaseSource] = {}
        self.single_sources = (
            single_sources
            if single_sources is not None
            else build_sources(
                self.settings.SINGLE_ITEM_CHAIN, self.settings, registry
            )
        )
        self.listing_sources = (
            listing_sources
            if listing_sources is not None
            else build_sources(
                self.settings.LISTING_CHAIN, self.settings, registry
            )
        )

    @property
    def sources(self) -> list[BaseSource]:
        """Every distinct adapter across both chains, in first-seen order."""
        seen: list[BaseSource] = []
        for source in self.single_sources + self.listing_sources:
            if not any(source is s for s in seen):
                seen.append(source)
        return seen

    async def close(self) -> None:
        for source in self.sources:
            try:
                await source.close()
            except Exception:
                logger.warning(
                    "Error closing source %s", source.source_id, exc_info=True
                )

    # ── Single property ──────────────────────────────────

    async def resolve_property(self, property_id: str) -> PropertyResolution:
        """Best available record for *property_id*."""
        cached = self.cache.get(property_id)
        if isinstance(cached, PropertyResolution):
            return cached

        failures: list[str] = []
        for source in self.single_sources:
            try:
                record = await resilient_call(
                    lambda src=source: src.fetch_one(property_id),
                    source.policy(single=True),
                    source=source.source_id,
                    context=f"property {property_id}",
                )
            except SourceError as exc:
                failures.append(_describe_failure(source, exc))
                logger.warning(
                    "[%s] Giving up on property %s: %s",
                    source.source_id,
                    property_id,
                    exc,
                )
                continue
            except Exception as exc:
                failures.append(_describe_failure(source, exc))
                logger.error(
                    "[%s] Unexpected error for property %s",
                    source.source_id,
                    property_id,
                    exc_info=True,
                )
                continue

            resolution = PropertyResolution(
                property=normalize(record), source=source.tag
            )
            self.cache.set_property(property_id, resolution)
            logger.info(
                "Resolved property %s from %s", property_id, source.tag.value
            )
            return resolution

        logger.error(
            "All sources failed for property %s: %s",
            property_id,
            "; ".join(failures),
        )
        return PropertyResolution(
            property=minimal_property(property_id),
            source=SourceTag.MOCK_ERROR,
            error="All property sources unavailable",
        )

    # ── Listings ─────────────────────────────────────────

    def _listing_from_page(
        self,
        raw_page: RawPage,
        filters: FilterSet,
        page: int,
        page_size: int,
        tag: SourceTag,
    ) -> ListingResult:
        items = [normalize(record) for record in raw_page.records]
        if raw_page.server_filtered:
            # Upstream already filtered and paginated everything but amenities.
            page_items = PropertyFilter.filter_by_amenities(
                items, filters.amenities
            )
            total = (
                raw_page.total_count
                if raw_page.total_count is not None
                else len(page_items)
            )
            total_pages = (
                raw_page.total_pages
                if raw_page.total_pages is not None
                else PropertyFilter.total_pages(total, page_size)
            )
            dropped = len(items) - len(page_items)
            if dropped and raw_page.total_count is not None:
                logger.warning(
                    "Amenity filter dropped %d of %d items on page %d; "
                    "keeping upstream totals %d/%d",
                    dropped,
                    len(items),
                    page,
                    total,
                    total_pages,
                )
        else:
            page_items, total, total_pages = PropertyFilter.apply(
                items, filters, page, page_size
            )
        return ListingResult(
            items=tuple(page_items),
            total_count=total,
            total_pages=total_pages,
            current_page=page,
            source=tag,
        )

    async def resolve_listing(
        self,
        filters: FilterSet | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> ListingResult:
        """One filtered page of properties from the first source that answers."""
        filters = filters or FilterSet()
        page_size = page_size or self.settings.LISTING_PAGE_SIZE
        key = filters.cache_key(page, page_size)
        cached = self.cache.get(key)
        if isinstance(cached, ListingResult):
            return cached

        context = f"listing page {page} ({filters.describe()})"
        failures: list[str] = []
        for source in self.listing_sources:
            try:
                raw_page = await resilient_call(
                    lambda src=source: src.fetch_many(filters, page, page_size),
                    source.policy(single=False),
                    source=source.source_id,
                    context=context,
                )
                result = self._listing_from_page(
                    raw_page, filters, page, page_size, source.tag
                )
            except SourceError as exc:
                failures.append(_describe_failure(source, exc))
                logger.warning(
                    "[%s] Giving up on %s: %s", source.source_id, context, exc
                )
                continue
            except Exception as exc:
                failures.append(_describe_failure(source, exc))
                logger.error(
                    "[%s] Unexpected error for %s",
                    source.source_id,
                    context,
                    exc_info=True,
                )
                continue

            self.cache.set_listing(key, result)
            logger.info(
                "Resolved %s from %s: %d of %d",
                context,
                source.tag.value,
                len(result.items),
                result.total_count,
            )
            return result

        logger.error(
            "All sources failed for %s: %s", context, "; ".join(failures)
        )
        return ListingResult(
            items=(),
            total_count=0,
            total_pages=0,
            current_page=page,
            source=SourceTag.MOCK_ERROR,
            error="All listing sources unavailable",
        )

    # ── Widgets ──────────────────────────────────────────

    async def latest(self, limit: int | None = None) -> ListingResult:
        """First unfiltered page, sized for the "latest" widget."""
        return await self.resolve_listing(
            FilterSet(), 1, limit or self.settings.LATEST_PAGE_SIZE
        )

    async def featured(self, limit: int | None = None) -> ListingResult:
        """Premium properties from the first unfiltered listing page."""
        limit = limit or self.settings.LATEST_PAGE_SIZE
        listing = await self.resolve_listing(
            FilterSet(), 1, self.settings.LISTING_PAGE_SIZE
        )
        premium: list[Property] = [p for p in listing.items if p.is_premium]
        premium = premium[:limit]
        return ListingResult(
            items=tuple(premium),
            total_count=len(premium),
            total_pages=1 if premium else 0,
            current_page=1,
            source=listing.source,
            error=listing.error,
        )
