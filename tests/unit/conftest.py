"""Unit-specific fixtures (no network; fetches are faked or mocked with respx)."""

from __future__ import annotations

import pytest
from fakes import FakeFetcher

from ringcatalog.fetch_cache import FetchCache


@pytest.fixture()
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def fetch_cache(fake_fetcher: FakeFetcher) -> FetchCache:
    return FetchCache(fake_fetcher)  # type: ignore[arg-type]
