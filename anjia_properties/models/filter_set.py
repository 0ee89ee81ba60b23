# anjia_properties/models/filter_set.py

"""Listing filter constraints and their deterministic cache key."""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from anjia_properties.errors.exceptions import ValidationError
from anjia_properties.utils.parsing import parse_int_prefix

logger = logging.getLogger("anjia.filters")

ANY = "any"


def _choice(value: Any) -> str | None:
    """Normalise an exact-match filter value; blank and "any" mean no filter."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() == ANY:
        return None
    return text


def _price(field: str, value: Any) -> int | None:
    """Parse a price bound.  Raises :class:`ValidationError` on junk."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value).strip().replace(",", "")
    if not text:
        return None
    parsed = parse_int_prefix(text)
    if parsed is None:
        raise ValidationError(field, value)
    return parsed


def _amenity_list(value: Any) -> tuple[str, ...]:
    """Accept a comma separated string or an iterable of strings."""
    if value is None:
        return ()
    items: Iterable[Any]
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = value
    return tuple(
        str(item).strip() for item in items if str(item).strip()
    )


@dataclass(frozen=True)
class FilterSet:
    """Optional constraints for a listing query.  ``None`` means unconstrained."""

    location: str | None = None
    min_price: int | None = None
    max_price: int | None = None
    bedrooms: str | None = None
    bathrooms: str | None = None
    property_type: str | None = None
    amenities: tuple[str, ...] = ()

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "FilterSet":
        """Build a filter set from camelCase request parameters.

        Unparseable price bounds are dropped with a warning instead of
        failing the request.
        """
        prices: dict[str, int | None] = {}
        for field, key in (("min_price", "minPrice"), ("max_price", "maxPrice")):
            try:
                prices[field] = _price(key, params.get(key))
            except ValidationError as exc:
                logger.warning("Ignoring filter: %s", exc)
                prices[field] = None

        location = str(params.get("location") or "").strip()
        property_type = _choice(params.get("propertyType"))
        return cls(
            location=location or None,
            min_price=prices["min_price"],
            max_price=prices["max_price"],
            bedrooms=_choice(params.get("bedrooms")),
            bathrooms=_choice(params.get("bathrooms")),
            property_type=property_type.lower() if property_type else None,
            amenities=_amenity_list(params.get("amenities")),
        )

    def is_empty(self) -> bool:
        return self == FilterSet()

    def cache_key(self, page: int, page_size: int) -> str:
        """Serialise filters plus paging into a stable string key."""
        payload = {
            "filters": {
                "location": self.location.lower() if self.location else None,
                "minPrice": self.min_price,
                "maxPrice": self.max_price,
                "bedrooms": self.bedrooms,
                "bathrooms": self.bathrooms,
                "propertyType": self.property_type,
                "amenities": sorted({a.lower() for a in self.amenities}),
            },
            "page": page,
            "pageSize": page_size,
        }
        return json.dumps(payload, sort_keys=True, separators=(",", ":"))

    def to_cms_params(self) -> dict[str, str]:
        """Query parameters understood by the ``anjia/v1/properties`` route.

        Amenities have no server-side counterpart and are left out.
        """
        params: dict[str, str] = {}
        if self.location:
            params["location"] = self.location
        if self.min_price is not None:
            params["min_price"] = str(self.min_price)
        if self.max_price is not None:
            params["max_price"] = str(self.max_price)
        if _choice(self.bedrooms):
            params["bedrooms"] = str(self.bedrooms)
        if _choice(self.bathrooms):
            params["bathrooms"] = str(self.bathrooms)
        if _choice(self.property_type):
            params["property_type"] = str(self.property_type)
        return params

    def describe(self) -> str:
        """Short human-readable summary for log lines."""
        parts = [
            f"{name}={value}"
            for name, value in (
                ("location", self.location),
                ("min_price", self.min_price),
                ("max_price", self.max_price),
                ("bedrooms", self.bedrooms),
                ("bathrooms", self.bathrooms),
                ("type", self.property_type),
            )
            if value is not None
        ]
        if self.amenities:
            parts.append(f"amenities={','.join(self.amenities)}")
        return " ".join(parts) or "no filters"
