# anjia_properties/sources/cms_source.py

"""WordPress CMS adapters (primary HTTPS host and HTTP mirror)."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from curl_cffi import requests as curl_requests

from anjia_properties.config.settings import Settings
from anjia_properties.errors.exceptions import (
    MalformedResponseError,
    NetworkError,
    NotFoundError,
)
from anjia_properties.models.filter_set import FilterSet
from anjia_properties.models.raw_record import RawPage, RawRecord, RecordKind
from anjia_properties.models.results import SourceTag
from anjia_properties.sources.base_source import BaseSource
from anjia_properties.utils.parsing import parse_int_prefix


class CmsSource(BaseSource):
    """Talks to a WordPress REST API exposing the ``property`` post type.

    Single lookups use ``wp/v2/property/{id}?_embed``; listings use the
    custom ``anjia/v1/properties`` route, which filters and paginates on
    the server.  Timeouts and retries are applied by the caller through
    :func:`~anjia_properties.services.resilience.resilient_call`.
    """

    networked = True
    default_base_url: str = ""

    def __init__(
        self,
        base_url: str | None = None,
        settings: Settings | None = None,
        session: Any = None,
    ) -> None:
        super().__init__(settings)
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self._session: Any = session

    def _get_session(self) -> Any:
        if self._session is None:
            self._session = curl_requests.AsyncSession(
                impersonate=self.settings.IMPERSONATE_BROWSER,
                headers=self.settings.DEFAULT_HEADERS,
            )
        return self._session

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def _get_json(
        self,
        url: str,
        params: dict[str, str] | None = None,
    ) -> Any:
        """GET *url* and decode JSON, mapping failures onto the error taxonomy."""
        session = self._get_session()
        try:
            resp = await session.get(
                url,
                params=params,
                headers=self.settings.DEFAULT_HEADERS,
            )
        except Exception as exc:
            raise NetworkError(
                f"request to {url} failed: {exc}", self.source_id
            ) from exc

        status = resp.status_code
        if status == 404:
            raise NotFoundError(f"HTTP 404 from {url}", self.source_id)
        if status == 429 or status >= 500:
            raise NetworkError(f"HTTP {status} from {url}", self.source_id)
        if status != 200:
            raise MalformedResponseError(
                f"HTTP {status} from {url}", self.source_id
            )
        try:
            return resp.json()
        except Exception as exc:
            raise MalformedResponseError(
                f"invalid JSON from {url}", self.source_id
            ) from exc

    def _checked_post(self, payload: Any, url: str) -> Mapping[str, Any]:
        if not isinstance(payload, Mapping) or not payload.get("id"):
            raise MalformedResponseError(
                f"no property object in response from {url}", self.source_id
            )
        return payload

    async def fetch_one(self, property_id: str) -> RawRecord:
        """Fetch one post, retrying without ``_embed`` if that variant is unusable."""
        url = f"{self.base_url}/wp/v2/property/{quote(property_id, safe='')}"
        try:
            payload = self._checked_post(
                await self._get_json(f"{url}?_embed"), url
            )
        except MalformedResponseError as exc:
            self.logger.info(
                "[%s] Embedded lookup for %s unusable (%s), retrying plain",
                self.source_id,
                property_id,
                exc,
            )
            payload = self._checked_post(await self._get_json(url), url)
        return RawRecord(kind=RecordKind.CMS, payload=payload)

    async def fetch_many(
        self,
        filters: FilterSet,
        page: int,
        page_size: int,
    ) -> RawPage:
        url = f"{self.base_url}/anjia/v1/properties"
        params = {
            "page": str(page),
            "per_page": str(page_size),
            **filters.to_cms_params(),
        }
        payload = await self._get_json(url, params)
        if not isinstance(payload, Mapping) or not isinstance(
            payload.get("properties"), list
        ):
            raise MalformedResponseError(
                f"invalid listing structure from {url}", self.source_id
            )

        records = [
            RawRecord(kind=RecordKind.CMS, payload=item)
            for item in payload["properties"]
            if isinstance(item, Mapping)
        ]
        skipped = len(payload["properties"]) - len(records)
        if skipped:
            self.logger.warning(
                "[%s] Skipped %d non-object rows in %s",
                self.source_id,
                skipped,
                url,
            )
        self.logger.info(
            "[%s] Fetched %d properties (page %d, %s)",
            self.source_id,
            len(records),
            page,
            filters.describe(),
        )
        return RawPage(
            records=records,
            total_count=parse_int_prefix(payload.get("total")),
            total_pages=parse_int_prefix(payload.get("total_pages")),
            server_filtered=True,
        )


class PrimaryCmsSource(CmsSource):
    """The production WordPress host (HTTPS)."""

    source_id = "primary_cms"
    tag = SourceTag.PRIMARY_CMS
    default_base_url = Settings.CMS_PRIMARY_URL


class MirrorCmsSource(CmsSource):
    """Plain-HTTP mirror of the same WordPress install."""

    source_id = "mirror_cms"
    tag = SourceTag.MIRROR_CMS
    default_base_url = Settings.CMS_MIRROR_URL
