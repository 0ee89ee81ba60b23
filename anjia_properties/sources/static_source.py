# anjia_properties/sources/static_source.py

"""Adapter over the bundled static property dataset."""

from pathlib import Path
from typing import Any

from anjia_properties.config.settings import Settings
from anjia_properties.errors.exceptions import NotFoundError
from anjia_properties.models.filter_set import FilterSet
from anjia_properties.models.raw_record import RawPage, RawRecord, RecordKind
from anjia_properties.models.results import SourceTag
from anjia_properties.sources.base_source import BaseSource, load_dataset


class StaticDatasetSource(BaseSource):
    """Serves the JSON dataset shipped with the package.

    Records are already in canonical camelCase shape.  Lookups by id are
    exact string matches.  Listings return every record; filtering and
    pagination are applied by the pipeline.
    """

    source_id = "static"
    tag = SourceTag.STATIC

    def __init__(
        self,
        settings: Settings | None = None,
        path: Path | None = None,
    ) -> None:
        super().__init__(settings)
        self.path = path or self.settings.STATIC_DATASET_PATH
        self._records: list[dict[str, Any]] | None = None

    def records(self) -> list[dict[str, Any]]:
        if self._records is None:
            self._records = load_dataset(self.path, self.source_id)
            self.logger.debug(
                "[%s] Loaded %d records from %s",
                self.source_id,
                len(self._records),
                self.path.name,
            )
        return self._records

    async def fetch_one(self, property_id: str) -> RawRecord:
        for record in self.records():
            if str(record.get("id")) == property_id:
                return RawRecord(kind=RecordKind.STATIC, payload=record)
        raise NotFoundError(
            f"no static record with id {property_id!r}", self.source_id
        )

    async def fetch_many(
        self,
        filters: FilterSet,
        page: int,
        page_size: int,
    ) -> RawPage:
        records = [
            RawRecord(kind=RecordKind.STATIC, payload=r) for r in self.records()
        ]
        return RawPage(records=records)
