# anjia_properties/services/health_checker.py

"""CMS host connectivity health checker."""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from curl_cffi import requests as curl_requests

from anjia_properties.config.settings import Settings
from anjia_properties.services.resolution_pipeline import load_source_class

logger = logging.getLogger("anjia.health")


@dataclass
class HealthResult:
    """Result of a single source health check."""

    source_id: str
    url: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def _default_session(settings: Settings) -> Any:
    return curl_requests.Session(
        impersonate=settings.IMPERSONATE_BROWSER,
        headers=settings.DEFAULT_HEADERS,
    )


def probe_source(
    source: dict[str, str],
    settings: Settings,
    session_factory: Callable[[Settings], Any] = _default_session,
) -> HealthResult:
    """GET the REST index of one CMS source and classify the outcome."""
    source_id = source["id"]

    try:
        adapter = load_source_class(source["source"])(settings=settings)
        url = adapter.base_url
    except Exception as exc:
        return HealthResult(
            source_id=source_id,
            url="",
            status="down",
            latency_ms=0.0,
            message=f"Failed to load source: {exc}",
        )

    start = time.monotonic()
    try:
        session = session_factory(settings)
        try:
            resp = session.get(url, timeout=settings.HEALTH_TIMEOUT)
        finally:
            session.close()
        elapsed_ms = (time.monotonic() - start) * 1000

        if resp.status_code != 200:
            return HealthResult(
                source_id=source_id,
                url=url,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )

        if elapsed_ms > settings.HEALTH_SLOW_MS:
            return HealthResult(
                source_id=source_id,
                url=url,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )

        return HealthResult(
            source_id=source_id,
            url=url,
            status="ok",
            latency_ms=elapsed_ms,
            message="",
        )

    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            source_id=source_id,
            url=url,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )


def _is_networked(source: dict[str, str]) -> bool:
    try:
        return bool(load_source_class(source["source"]).networked)
    except Exception:
        logger.warning("Cannot load source %s", source["id"], exc_info=True)
        return False


class HealthChecker:
    """Runs concurrent health probes against the networked sources."""

    def __init__(
        self,
        settings: Settings | None = None,
        session_factory: Callable[[Settings], Any] = _default_session,
    ) -> None:
        self.settings = settings or Settings()
        self.session_factory = session_factory
        self.sources = [
            s for s in self.settings.AVAILABLE_SOURCES if _is_networked(s)
        ]

    async def check_all(self) -> list[HealthResult]:
        """Probe every CMS source concurrently."""
        tasks = [
            asyncio.to_thread(
                probe_source, src, self.settings, self.session_factory
            )
            for src in self.sources
        ]
        results: list[HealthResult] = list(
            await asyncio.gather(*tasks)
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.source_id,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
