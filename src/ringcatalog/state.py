"""Application state: the wired-up components shared by every caller."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ringcatalog.config import Settings
from ringcatalog.config_resolver import ConfigurationResolver
from ringcatalog.fetch_cache import FetchCache
from ringcatalog.fetcher import Fetcher, build_http_client
from ringcatalog.loader import CatalogLoader
from ringcatalog.refresh import run_refresh_loop
from ringcatalog.search import SearchEngine

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import httpx


@dataclass
class AppState:
    settings: Settings
    http_client: httpx.AsyncClient
    fetcher: Fetcher
    resolver: ConfigurationResolver
    loader: CatalogLoader
    search: SearchEngine

    async def run_refresh(self, stop: asyncio.Event) -> None:
        """Reload on the configured interval until ``stop`` is set."""
        interval = self.settings.refresh.interval_hours * 3600
        await run_refresh_loop(self.loader, interval, stop)


def build_app_state(settings: Settings, http_client: httpx.AsyncClient) -> AppState:
    """Wire every component around an existing HTTP client."""
    fetcher = Fetcher(http_client, settings.fetcher)
    resolver = ConfigurationResolver(fetcher, settings.catalog)
    loader = CatalogLoader(resolver, FetchCache(fetcher))
    return AppState(
        settings=settings,
        http_client=http_client,
        fetcher=fetcher,
        resolver=resolver,
        loader=loader,
        search=SearchEngine(loader),
    )


@contextlib.asynccontextmanager
async def create_app_state(settings: Settings | None = None) -> AsyncIterator[AppState]:
    """Build an :class:`AppState` with its own HTTP client, closed on exit."""
    settings = settings or Settings()
    async with build_http_client(settings.fetcher) as client:
        yield build_app_state(settings, client)
