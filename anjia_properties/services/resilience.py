# anjia_properties/services/resilience.py

"""Timeout, retry and backoff around a single adapter operation."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from anjia_properties.config.settings import Settings
from anjia_properties.errors.exceptions import NetworkError, SourceError

logger = logging.getLogger("anjia.resilience")

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Per-adapter call budget.

    ``timeout`` bounds each attempt; ``max_attempts`` counts the first try.
    The delay before retry *n* is ``backoff_base * 2 ** (n - 1)``.
    """

    timeout: float
    max_attempts: int = Settings.MAX_ATTEMPTS
    backoff_base: float = Settings.BACKOFF_BASE

    def delay_for(self, attempt: int) -> float:
        return self.backoff_base * 2 ** (attempt - 1)


async def _backoff(delay: float) -> None:
    """Sleep between attempts (patched out in tests)."""
    await asyncio.sleep(delay)


async def resilient_call(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    source: str,
    context: str,
) -> T:
    """Run *operation* under *policy*.

    Timeouts cancel the in-flight attempt and count as
    :class:`NetworkError`.  Only network errors are retried; any other
    :class:`SourceError` is raised straight away.  After the last attempt
    the final error is raised to the caller.
    """
    last_error: SourceError = NetworkError("no attempt made", source)
    for attempt in range(1, policy.max_attempts + 1):
        try:
            return await asyncio.wait_for(operation(), timeout=policy.timeout)
        except asyncio.TimeoutError:
            last_error = NetworkError(
                f"timed out after {policy.timeout:g}s", source
            )
        except NetworkError as exc:
            last_error = exc
        logger.warning(
            "[%s] %s failed on attempt %d/%d: %s",
            source,
            context,
            attempt,
            policy.max_attempts,
            last_error,
        )
        if attempt < policy.max_attempts:
            await _backoff(policy.delay_for(attempt))
    raise last_error
