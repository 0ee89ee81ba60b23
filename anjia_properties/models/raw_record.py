# anjia_properties/models/raw_record.py

"""Raw, not yet normalised records as handed over by the source adapters."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RecordKind(str, Enum):
    """Shape family of a raw payload."""

    CMS = "cms"             # WordPress post or anjia/v1 listing row
    STATIC = "static"       # bundled dataset entry, canonical camelCase
    FALLBACK = "fallback"   # hand-authored catalog entry


@dataclass(frozen=True)
class RawRecord:
    """One upstream payload tagged with its shape family."""

    kind: RecordKind
    payload: Any


@dataclass(frozen=True)
class RawPage:
    """Result of an adapter's listing fetch.

    ``total_count`` is ``None`` when the source cannot report it.
    ``server_filtered`` means the source already applied the filter set
    and pagination, so ``records`` is exactly the requested page.
    """

    records: list[RawRecord] = field(default_factory=list)
    total_count: int | None = None
    total_pages: int | None = None
    server_filtered: bool = False
