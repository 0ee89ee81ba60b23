# anjia_properties/filters/property_filter.py

"""Filtering and pagination of canonical property lists."""

import logging
import math

from anjia_properties.models.filter_set import FilterSet
from anjia_properties.models.property import Property
from anjia_properties.utils.parsing import parse_int_prefix

logger = logging.getLogger("anjia.filters")


class PropertyFilter:
    """Apply a :class:`FilterSet` to normalised properties and slice a page."""

    @staticmethod
    def matches(prop: Property, filters: FilterSet) -> bool:
        """Return True when *prop* satisfies every constraint in *filters*.

        Prices compare on the leading integer of ``price``.  A price with no
        leading integer counts as 0 against ``min_price`` and never passes
        ``max_price``.
        """
        if filters.location and (
            filters.location.lower() not in prop.location.lower()
        ):
            return False

        price = parse_int_prefix(prop.price)
        if filters.min_price is not None and (price or 0) < filters.min_price:
            return False
        if filters.max_price is not None and (
            price is None or price > filters.max_price
        ):
            return False

        if filters.bedrooms is not None and prop.bedrooms != filters.bedrooms:
            return False
        if filters.bathrooms is not None and prop.bathrooms != filters.bathrooms:
            return False
        if (
            filters.property_type is not None
            and prop.property_type != filters.property_type
        ):
            return False

        return PropertyFilter.has_amenities(prop, filters.amenities)

    @staticmethod
    def has_amenities(prop: Property, wanted: tuple[str, ...]) -> bool:
        """Every wanted amenity must be present, compared case-insensitively."""
        if not wanted:
            return True
        present = {a.lower() for a in prop.amenities}
        return all(a.lower() in present for a in wanted)

    @staticmethod
    def filter_by_amenities(
        items: list[Property],
        wanted: tuple[str, ...],
    ) -> list[Property]:
        """Amenity-only pass for pages already filtered upstream."""
        if not wanted:
            return items
        kept = [p for p in items if PropertyFilter.has_amenities(p, wanted)]
        if len(kept) != len(items):
            logger.info(
                "Filtered out %d properties lacking amenities %s",
                len(items) - len(kept),
                ", ".join(wanted),
            )
        return kept

    @staticmethod
    def total_pages(total_count: int, page_size: int) -> int:
        if page_size <= 0:
            return 0
        return math.ceil(total_count / page_size)

    @staticmethod
    def paginate(
        items: list[Property],
        page: int,
        page_size: int,
    ) -> list[Property]:
        """1-based page slice; out-of-range pages are empty."""
        if page < 1 or page_size <= 0:
            return []
        start = (page - 1) * page_size
        return items[start:start + page_size]

    @staticmethod
    def apply(
        items: list[Property],
        filters: FilterSet,
        page: int,
        page_size: int,
    ) -> tuple[list[Property], int, int]:
        """Filter *items*, then return ``(page_items, total_count, total_pages)``."""
        kept = [p for p in items if PropertyFilter.matches(p, filters)]
        total = len(kept)
        logger.debug(
            "Filter %s kept %d of %d properties",
            filters.describe(),
            total,
            len(items),
        )
        return (
            PropertyFilter.paginate(kept, page, page_size),
            total,
            PropertyFilter.total_pages(total, page_size),
        )
