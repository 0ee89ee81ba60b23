# tests/helpers.py

"""Fakes shared by the adapter, pipeline and API tests."""

import asyncio
from typing import Any

from anjia_properties.config.settings import Settings
from anjia_properties.errors.exceptions import NetworkError, NotFoundError
from anjia_properties.models.filter_set import FilterSet
from anjia_properties.models.raw_record import RawPage, RawRecord, RecordKind
from anjia_properties.models.results import SourceTag
from anjia_properties.sources.base_source import BaseSource


class FakeResponse:
    """Minimal stand-in for a curl_cffi response."""

    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Async session returning queued responses and recording calls."""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, dict[str, str] | None]] = []
        self.closed = False

    async def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        **_kwargs: Any,
    ) -> FakeResponse:
        self.calls.append((url, params))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


def cms_post(post_id: int = 42, **acf: Any) -> dict[str, Any]:
    """A wp/v2 property post with ACF custom fields."""
    fields = {
        "location": "Kololo, Kampala",
        "bedrooms": "2",
        "bathrooms": "1",
        "price": "1500",
        "currency": "USD",
        "property_type": "apartment",
    }
    fields.update(acf)
    return {
        "id": post_id,
        "title": {"rendered": "Kololo &#8211; Garden Flat"},
        "content": {"rendered": "<p>Quiet flat.</p>"},
        "acf": fields,
        "_embedded": {
            "wp:featuredmedia": [
                {"source_url": "https://wp.example.com/uploads/flat.jpg"}
            ]
        },
    }


class StubSource(BaseSource):
    """In-memory adapter with scripted outcomes and call counting."""

    def __init__(
        self,
        source_id: str = "stub",
        tag: SourceTag = SourceTag.PRIMARY_CMS,
        records: dict[str, dict[str, Any]] | None = None,
        page: RawPage | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
        kind: RecordKind = RecordKind.STATIC,
        settings: Settings | None = None,
        networked: bool = False,
    ) -> None:
        self.source_id = source_id
        self.tag = tag
        self.networked = networked
        super().__init__(settings)
        self.records = records or {}
        self.page = page
        self.error = error
        self.delay = delay
        self.kind = kind
        self.one_calls = 0
        self.many_calls = 0
        self.closed = False

    async def _maybe_fail(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error

    async def fetch_one(self, property_id: str) -> RawRecord:
        self.one_calls += 1
        await self._maybe_fail()
        if property_id not in self.records:
            raise NotFoundError(f"no {property_id}", self.source_id)
        return RawRecord(kind=self.kind, payload=self.records[property_id])

    async def fetch_many(
        self,
        filters: FilterSet,
        page: int,
        page_size: int,
    ) -> RawPage:
        self.many_calls += 1
        await self._maybe_fail()
        if self.page is None:
            raise NetworkError("no page scripted", self.source_id)
        return self.page

    async def close(self) -> None:
        self.closed = True
