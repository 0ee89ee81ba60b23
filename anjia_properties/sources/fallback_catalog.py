# anjia_properties/sources/fallback_catalog.py

"""Last-resort catalog that answers every single-property lookup."""

from pathlib import Path
from typing import Any

from anjia_properties.config.settings import Settings
from anjia_properties.errors.exceptions import MalformedResponseError
from anjia_properties.models.filter_set import FilterSet
from anjia_properties.models.raw_record import RawPage, RawRecord, RecordKind
from anjia_properties.models.results import SourceTag
from anjia_properties.sources.base_source import BaseSource, load_dataset
from anjia_properties.utils.parsing import parse_int_or_zero


def catalog_index(property_id: str, size: int) -> int:
    """Map any id onto ``[0, size)``.

    The leading integer of the id (0 when there is none) modulo *size*.
    Python's modulo keeps negative ids in range.
    """
    return parse_int_or_zero(property_id) % size


class FallbackCatalogSource(BaseSource):
    """Maps a requested id onto one of a handful of hand-written records.

    The returned record carries the *requested* id, so ``"3"`` and
    ``"8"`` both render catalog entry 3 under their own ids.
    """

    source_id = "fallback"
    tag = SourceTag.FALLBACK

    def __init__(
        self,
        settings: Settings | None = None,
        path: Path | None = None,
    ) -> None:
        super().__init__(settings)
        self.path = path or self.settings.FALLBACK_CATALOG_PATH
        self._catalog: list[dict[str, Any]] | None = None

    def catalog(self) -> list[dict[str, Any]]:
        if self._catalog is None:
            catalog = load_dataset(self.path, self.source_id)
            if not catalog:
                raise MalformedResponseError(
                    "fallback catalog is empty", self.source_id
                )
            self._catalog = catalog
        return self._catalog

    async def fetch_one(self, property_id: str) -> RawRecord:
        catalog = self.catalog()
        index = catalog_index(property_id, len(catalog))
        payload = dict(catalog[index])
        payload["id"] = property_id
        self.logger.info(
            "[%s] Serving catalog entry %d for id %s",
            self.source_id,
            index,
            property_id,
        )
        return RawRecord(kind=RecordKind.FALLBACK, payload=payload)

    async def fetch_many(
        self,
        filters: FilterSet,
        page: int,
        page_size: int,
    ) -> RawPage:
        records = [
            RawRecord(kind=RecordKind.FALLBACK, payload=r)
            for r in self.catalog()
        ]
        return RawPage(records=records)
