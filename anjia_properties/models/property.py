# anjia_properties/models/property.py

"""Canonical property record shared by every data source."""

from dataclasses import dataclass
from typing import Any

PROPERTY_TYPES: frozenset[str] = frozenset(
    {
        "apartment",
        "house",
        "land",
        "hotel",
        "commercial",
        "studio",
        "villa",
        "condominium",
        "property",
    }
)
UNKNOWN_PROPERTY_TYPE = "property"

CURRENCIES: frozenset[str] = frozenset({"USD", "UGX"})
DEFAULT_CURRENCY = "USD"

# attribute name -> wire (camelCase) name, omitted from output when None
_OPTIONAL_FIELDS: dict[str, str] = {
    "payment_terms": "paymentTerms",
    "owner_name": "ownerName",
    "owner_contact": "ownerContact",
    "google_pin": "googlePin",
    "square_meters": "squareMeters",
    "floor": "floor",
    "units": "units",
}


@dataclass(frozen=True)
class AgentContact:
    """Contact card shown next to a listing."""

    id: str
    name: str
    email: str
    phone: str
    company: str

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> "AgentContact":
        return cls(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            phone=data["phone"],
            company=data["company"],
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "company": self.company,
        }


@dataclass(frozen=True)
class Property:
    """A single listing in canonical, source-independent form.

    Instances are immutable; list-valued fields are tuples so a record
    handed out from the cache cannot be changed by its caller.
    """

    id: str
    title: str
    description: str
    location: str
    property_type: str
    bedrooms: str
    bathrooms: str
    price: str
    currency: str
    amenities: tuple[str, ...]
    images: tuple[str, ...]
    agents: AgentContact
    is_premium: bool = False
    payment_terms: str | None = None
    owner_name: str | None = None
    owner_contact: str | None = None
    google_pin: str | None = None
    square_meters: str | None = None
    floor: str | None = None
    units: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the camelCase shape the front end consumes."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "propertyType": self.property_type,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "price": self.price,
            "currency": self.currency,
            "amenities": list(self.amenities),
            "images": list(self.images),
            "isPremium": self.is_premium,
            "agents": self.agents.to_dict(),
        }
        for attr, wire_name in _OPTIONAL_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                data[wire_name] = value
        return data
