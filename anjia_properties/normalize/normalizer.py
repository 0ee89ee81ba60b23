# anjia_properties/normalize/normalizer.py

"""Turn raw payloads from any source into canonical :class:`Property` records.

:func:`normalize` never raises.  Each field is extracted in isolation: a
field that cannot be read falls back to its documented default without
affecting the others.  A payload that is not a mapping at all still yields
a renderable minimal record.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from bs4 import BeautifulSoup

from anjia_properties.config.settings import Settings
from anjia_properties.models.property import (
    CURRENCIES,
    DEFAULT_CURRENCY,
    PROPERTY_TYPES,
    UNKNOWN_PROPERTY_TYPE,
    AgentContact,
    Property,
)
from anjia_properties.models.raw_record import RawRecord, RecordKind
from anjia_properties.normalize.fields import (
    CANONICAL_CHAINS,
    CMS_CHAINS,
    FieldChain,
)
from anjia_properties.normalize.images import resolve_images
from anjia_properties.utils.parsing import as_text, is_truthy

logger = logging.getLogger("anjia.normalize")

UNKNOWN_ID = "unknown"
DEFAULT_TITLE = "Property Information"
DEFAULT_DESCRIPTION = "<p>Property details are being updated.</p>"
DEFAULT_LOCATION = "An Jia Properties"
DEFAULT_COUNT = "0"
DEFAULT_PRICE = "0"
UNKNOWN_PRICE = "Contact agent"
ERROR_TITLE = "Error Loading Property"
ERROR_DESCRIPTION = (
    "<p>Error loading property details. Please try again later.</p>"
)
MINIMAL_AMENITIES: tuple[str, ...] = (
    "WiFi",
    "Parking",
    "Security",
    "Swimming Pool",
    "Gym",
)

_TYPE_ALIASES: dict[str, str] = {
    "apartments": "apartment",
    "flat": "apartment",
    "houses": "house",
    "hotels": "hotel",
    "condo": "condominium",
    "office": "commercial",
    "villas": "villa",
}

_CHAINS_BY_KIND: dict[RecordKind, dict[str, FieldChain]] = {
    RecordKind.CMS: CMS_CHAINS,
    RecordKind.STATIC: CANONICAL_CHAINS,
    RecordKind.FALLBACK: CANONICAL_CHAINS,
}


# ── Converters ───────────────────────────────────────────


def plain_text(value: Any) -> str:
    """Strip markup and entities from a rendered CMS title."""
    text = as_text(value)
    if "<" not in text and "&" not in text:
        return text
    soup = BeautifulSoup(text, "lxml")
    return " ".join(soup.get_text(" ").split())


def property_type(value: Any) -> str:
    tag = as_text(value).lower()
    tag = _TYPE_ALIASES.get(tag, tag)
    return tag if tag in PROPERTY_TYPES else UNKNOWN_PROPERTY_TYPE


def currency(value: Any) -> str:
    code = as_text(value).upper()
    return code if code in CURRENCIES else DEFAULT_CURRENCY


def payment_terms(value: Any) -> str:
    text = as_text(value).replace("_", " ")
    return text[:1].upper() + text[1:]


def _amenity_label(item: Any) -> str:
    # ACF checkbox fields may return {"value": ..., "label": ...}
    if isinstance(item, Mapping):
        item = item.get("label") or item.get("value") or item.get("name")
    return as_text(item)


def amenities(value: Any) -> tuple[str, ...]:
    """Accept a list of tags or a comma separated string."""
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        return ()
    return tuple(
        label for label in (_amenity_label(i) for i in items) if label
    )


def optional_text(value: Any) -> str | None:
    return as_text(value) or None


# ── Extraction ───────────────────────────────────────────


def _extract(
    chains: dict[str, FieldChain],
    payload: Mapping[str, Any],
    name: str,
    convert: Callable[[Any], Any],
    default: Any,
) -> Any:
    """Resolve and convert one field; any failure yields *default*."""
    try:
        value = chains[name].resolve(payload)
        if value is None:
            return default
        result = convert(value)
    except Exception:
        logger.debug(
            "Field '%s' unreadable, using default", name, exc_info=True
        )
        return default
    if result is None or result == "" or result == ():
        return default
    return result


def default_agent() -> AgentContact:
    return AgentContact.from_dict(Settings.DEFAULT_AGENT)


def minimal_property(
    property_id: str = UNKNOWN_ID,
    title: str = DEFAULT_TITLE,
    description: str = DEFAULT_DESCRIPTION,
) -> Property:
    """Smallest renderable record, used when nothing usable is available."""
    return Property(
        id=property_id or UNKNOWN_ID,
        title=title,
        description=description,
        location=DEFAULT_LOCATION,
        property_type=UNKNOWN_PROPERTY_TYPE,
        bedrooms=DEFAULT_COUNT,
        bathrooms=DEFAULT_COUNT,
        price=UNKNOWN_PRICE,
        currency=DEFAULT_CURRENCY,
        amenities=MINIMAL_AMENITIES,
        images=(Settings.PLACEHOLDER_IMAGE,),
        agents=default_agent(),
    )


def _build(payload: Mapping[str, Any], kind: RecordKind) -> Property:
    chains = _CHAINS_BY_KIND[kind]

    def field(name: str, convert: Callable[[Any], Any], default: Any) -> Any:
        return _extract(chains, payload, name, convert, default)

    return Property(
        id=field("id", as_text, UNKNOWN_ID),
        title=field("title", plain_text, DEFAULT_TITLE),
        description=field("description", as_text, DEFAULT_DESCRIPTION),
        location=field("location", as_text, DEFAULT_LOCATION),
        property_type=field("property_type", property_type, UNKNOWN_PROPERTY_TYPE),
        bedrooms=field("bedrooms", as_text, DEFAULT_COUNT),
        bathrooms=field("bathrooms", as_text, DEFAULT_COUNT),
        price=field("price", as_text, DEFAULT_PRICE),
        currency=field("currency", currency, DEFAULT_CURRENCY),
        amenities=field("amenities", amenities, Settings.DEFAULT_AMENITIES),
        images=tuple(resolve_images(payload, kind=kind)),
        agents=default_agent(),
        is_premium=field("is_premium", is_truthy, False),
        payment_terms=field("payment_terms", payment_terms, None),
        owner_name=field("owner_name", optional_text, None),
        owner_contact=field("owner_contact", optional_text, None),
        google_pin=field("google_pin", optional_text, None),
        square_meters=field("square_meters", optional_text, None),
        floor=field("floor", optional_text, None),
        units=field("units", optional_text, None),
    )


def _salvage_id(payload: Any) -> str:
    try:
        return as_text(payload.get("id")) or UNKNOWN_ID
    except Exception:
        return UNKNOWN_ID


def normalize(
    raw: RawRecord | Mapping[str, Any] | Any,
    kind: RecordKind = RecordKind.CMS,
) -> Property:
    """Normalise a raw record into a :class:`Property`.  Never raises.

    *kind* is only consulted when *raw* is a bare payload rather than a
    :class:`RawRecord`.
    """
    if isinstance(raw, RawRecord):
        kind, payload = raw.kind, raw.payload
    else:
        payload = raw

    if not isinstance(payload, Mapping):
        logger.warning(
            "Cannot normalise %s payload of type %s",
            kind.value,
            type(payload).__name__,
        )
        return minimal_property(
            UNKNOWN_ID, title=ERROR_TITLE, description=ERROR_DESCRIPTION
        )

    try:
        return _build(payload, kind)
    except Exception:
        logger.error(
            "Normalisation failed for %s record", kind.value, exc_info=True
        )
        return minimal_property(
            _salvage_id(payload),
            title=ERROR_TITLE,
            description=ERROR_DESCRIPTION,
        )
