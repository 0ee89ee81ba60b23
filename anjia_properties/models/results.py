# anjia_properties/models/results.py

"""Containers returned by the resolution pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from anjia_properties.models.property import Property


class SourceTag(str, Enum):
    """Which adapter ultimately satisfied a request."""

    PRIMARY_CMS = "primary-cms"
    MIRROR_CMS = "mirror-cms"
    STATIC = "static"
    FALLBACK = "fallback"
    MOCK_ERROR = "mock-error"


@dataclass(frozen=True)
class PropertyResolution:
    """A resolved single property and where it came from."""

    property: Property
    source: SourceTag
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "property": self.property.to_dict(),
            "source": self.source.value,
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class ListingResult:
    """One page of a filtered listing query."""

    items: tuple[Property, ...]
    total_count: int
    total_pages: int
    current_page: int
    source: SourceTag
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "properties": [p.to_dict() for p in self.items],
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
            "currentPage": self.current_page,
            "source": self.source.value,
        }
        if self.error:
            data["error"] = self.error
        return data
