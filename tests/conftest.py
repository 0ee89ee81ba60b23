# tests/conftest.py

"""Shared pytest fixtures for all pipeline tests."""

from collections.abc import Generator
from unittest.mock import AsyncMock, patch

import pytest


@pytest.fixture(autouse=True)
def mock_backoff() -> Generator[AsyncMock, None, None]:
    """Patch the retry backoff so retry loops run instantly."""
    with patch(
        "anjia_properties.services.resilience._backoff",
        new_callable=AsyncMock,
    ) as backoff:
        yield backoff
