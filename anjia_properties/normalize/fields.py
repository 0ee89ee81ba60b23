# anjia_properties/normalize/fields.py

"""Ordered field resolution chains.

A :class:`FieldChain` is a list of accessors tried in order; the first one
that yields a non-empty value wins.  This replaces scattered
``a or b or c`` probing with one declarative table per payload shape.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Accessor = Callable[[Mapping[str, Any]], Any]

CUSTOM_FIELD_CONTAINERS: tuple[str, ...] = ("acf", "meta")


def is_empty(value: Any) -> bool:
    """``None``, ``False``, blank strings and empty containers are empty.

    ACF reports unset fields as ``false``, so ``False`` counts as empty;
    ``0`` does not.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


def custom(*names: str) -> Accessor:
    """Read a CMS custom field (ACF first, then post meta) by any of *names*."""

    def accessor(raw: Mapping[str, Any]) -> Any:
        for container in CUSTOM_FIELD_CONTAINERS:
            fields = raw.get(container)
            if not isinstance(fields, Mapping):
                continue
            for name in names:
                value = fields.get(name)
                if not is_empty(value):
                    return value
        return None

    return accessor


def top(name: str) -> Accessor:
    """Read a top-level key."""

    def accessor(raw: Mapping[str, Any]) -> Any:
        return raw.get(name)

    return accessor


def rendered(name: str) -> Accessor:
    """Read a WordPress ``{"rendered": ...}`` field, or a plain string."""

    def accessor(raw: Mapping[str, Any]) -> Any:
        value = raw.get(name)
        if isinstance(value, Mapping):
            return value.get("rendered")
        return value

    return accessor


@dataclass(frozen=True)
class FieldChain:
    """Accessors for one canonical field, in order of preference."""

    name: str
    accessors: tuple[Accessor, ...]

    def resolve(self, raw: Mapping[str, Any]) -> Any:
        for accessor in self.accessors:
            value = accessor(raw)
            if not is_empty(value):
                return value
        return None


def chain(name: str, *accessors: Accessor) -> FieldChain:
    return FieldChain(name=name, accessors=accessors)


# WordPress posts (wp/v2) and anjia/v1 listing rows:
# snake_case custom fields -> camelCase aliases -> legacy top-level keys.
CMS_CHAINS: dict[str, FieldChain] = {
    c.name: c
    for c in (
        chain("id", top("id"), top("ID")),
        chain("title", rendered("title")),
        chain(
            "description",
            rendered("content"),
            top("description"),
            rendered("excerpt"),
        ),
        chain("location", custom("location", "property_location"), top("location")),
        chain("bedrooms", custom("bedrooms", "property_bedrooms"), top("bedrooms")),
        chain("bathrooms", custom("bathrooms", "property_bathrooms"), top("bathrooms")),
        chain("price", custom("price", "property_price"), top("price")),
        chain("currency", custom("currency", "property_currency"), top("currency")),
        chain(
            "property_type",
            custom("property_type", "type"),
            custom("propertyType"),
            top("propertyType"),
            top("property_type"),
        ),
        chain(
            "payment_terms",
            custom("payment_terms"),
            custom("paymentTerms"),
            top("paymentTerms"),
            top("payment_terms"),
        ),
        chain(
            "amenities",
            custom("amenities", "property_amenities", "features"),
            top("amenities"),
            top("features"),
        ),
        chain(
            "is_premium",
            custom("is_premium"),
            custom("isPremium"),
            top("isPremium"),
            top("is_premium"),
        ),
        chain("owner_name", custom("owner_name"), custom("ownerName"), top("ownerName")),
        chain(
            "owner_contact",
            custom("owner_contact"),
            custom("ownerContact"),
            top("ownerContact"),
        ),
        chain("google_pin", custom("google_pin"), custom("googlePin"), top("googlePin")),
        chain(
            "square_meters",
            custom("square_meters"),
            custom("squareMeters"),
            top("squareMeters"),
            top("square_meters"),
        ),
        chain("floor", custom("floor"), top("floor")),
        chain("units", custom("units"), top("units")),
    )
}

# Bundled dataset and fallback catalog: canonical camelCase first,
# snake_case spellings as legacy aliases.
CANONICAL_CHAINS: dict[str, FieldChain] = {
    c.name: c
    for c in (
        chain("id", top("id")),
        chain("title", rendered("title")),
        chain("description", rendered("description"), rendered("content")),
        chain("location", top("location")),
        chain("bedrooms", top("bedrooms")),
        chain("bathrooms", top("bathrooms")),
        chain("price", top("price")),
        chain("currency", top("currency")),
        chain("property_type", top("propertyType"), top("property_type")),
        chain("payment_terms", top("paymentTerms"), top("payment_terms")),
        chain("amenities", top("amenities"), top("property_amenities")),
        chain("is_premium", top("isPremium"), top("is_premium")),
        chain("owner_name", top("ownerName"), top("owner_name")),
        chain("owner_contact", top("ownerContact"), top("owner_contact")),
        chain("google_pin", top("googlePin"), top("google_pin")),
        chain("square_meters", top("squareMeters"), top("square_meters")),
        chain("floor", top("floor")),
        chain("units", top("units")),
    )
}
