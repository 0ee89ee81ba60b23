# anjia_properties/sources/base_source.py

"""Abstract base class for all property data sources."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from anjia_properties.config.settings import Settings
from anjia_properties.errors.exceptions import MalformedResponseError
from anjia_properties.models.filter_set import FilterSet
from anjia_properties.models.raw_record import RawPage, RawRecord
from anjia_properties.models.results import SourceTag
from anjia_properties.services.resilience import RetryPolicy


class BaseSource(ABC):
    """Uniform adapter contract: one raw record by id, or one raw page.

    Adapters only fetch; normalisation, filtering and caching happen in
    the resolution pipeline.
    """

    source_id: str = ""
    tag: SourceTag = SourceTag.MOCK_ERROR
    networked: bool = False

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.logger = logging.getLogger(f"anjia.{self.source_id}")

    def policy(self, single: bool) -> RetryPolicy:
        """Timeout/retry budget for one call of this adapter.

        Local sources get a single attempt; there is nothing to recover
        from by asking a JSON file twice.
        """
        timeout = (
            self.settings.SINGLE_TIMEOUT
            if single
            else self.settings.LISTING_TIMEOUT
        )
        return RetryPolicy(
            timeout=timeout,
            max_attempts=self.settings.MAX_ATTEMPTS if self.networked else 1,
            backoff_base=self.settings.BACKOFF_BASE,
        )

    async def close(self) -> None:
        """Release network resources, if any."""
        return None

    @abstractmethod
    async def fetch_one(self, property_id: str) -> RawRecord:
        """Return the raw record for *property_id* or raise a SourceError."""
        ...

    @abstractmethod
    async def fetch_many(
        self,
        filters: FilterSet,
        page: int,
        page_size: int,
    ) -> RawPage:
        """Return raw listing records or raise a SourceError."""
        ...


def load_dataset(path: Path, source_id: str) -> list[dict[str, Any]]:
    """Read a bundled JSON array of records.

    Raises :class:`MalformedResponseError` when the file is missing or is
    not a list of objects, so the pipeline treats it like any failed source.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data: Any = json.load(f)
    except (OSError, ValueError) as exc:
        raise MalformedResponseError(
            f"cannot read dataset {path.name}: {exc}", source_id
        ) from exc
    if not isinstance(data, list) or not all(
        isinstance(item, dict) for item in data
    ):
        raise MalformedResponseError(
            f"dataset {path.name} is not a list of records", source_id
        )
    return data
