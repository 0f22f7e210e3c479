"""Integration test fixtures.

Provides a fully wired AppState whose HTTP client talks to the respx-mocked
endpoints from ``catalog_scenario``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
from catalog_scenario import MockCatalog, mock_catalog_endpoints

from ringcatalog.config import Settings
from ringcatalog.state import AppState, create_app_state


@pytest.fixture()
def mock_catalog() -> Iterator[MockCatalog]:
    with mock_catalog_endpoints() as catalog:
        yield catalog


@pytest.fixture()
async def app_state(settings: Settings, mock_catalog: MockCatalog) -> AsyncIterator[AppState]:
    """Full AppState wired against the mocked endpoints."""
    async with create_app_state(settings) as state:
        yield state
