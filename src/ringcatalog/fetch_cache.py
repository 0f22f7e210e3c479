"""Request-deduplicating source accessor.

The first ``fetch`` of a URL starts a task; every other caller, concurrent or
later, awaits that same task until the cache is cleared. A failed fetch,
whatever the error, is cached as ``None`` as well, so a broken URL costs one
request per cycle.

All state lives on a single event loop: check-then-insert on ``_inflight``
happens without an intervening ``await``, which makes it insert-if-absent.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from ringcatalog.errors import CatalogError

if TYPE_CHECKING:
    from ringcatalog.fetcher import Fetcher

log = structlog.get_logger()


class FetchCache:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher
        self._inflight: dict[str, asyncio.Task[str | None]] = {}
        # url → partitions that referenced it this cycle
        self._usage: dict[str, set[str]] = {}

    async def fetch(self, url: str) -> str | None:
        task = self._inflight.get(url)
        if task is None:
            task = asyncio.create_task(self._fetch(url), name=f"fetch:{url}")
            self._inflight[url] = task
        else:
            log.debug("fetch_deduplicated", url=url)
        # One waiter being cancelled must not cancel the fetch for the others
        return await asyncio.shield(task)

    async def _fetch(self, url: str) -> str | None:
        try:
            return await self._fetcher.fetch(url)
        except CatalogError as exc:
            log.warning("source_fetch_failed", url=url, code=exc.code, error=exc.message)
            return None
        except Exception:
            log.error("source_fetch_failed", url=url, exc_info=True)
            return None

    def track_usage(self, url: str, partition: str) -> None:
        self._usage.setdefault(url, set()).add(partition)

    @property
    def network_fetches(self) -> int:
        return len(self._inflight)

    @property
    def source_references(self) -> int:
        return sum(len(partitions) for partitions in self._usage.values())

    @property
    def cache_efficiency(self) -> float:
        """Share of logical source references served without a new network call."""
        references = self.source_references
        if references == 0:
            return 0.0
        return max(0.0, (references - self.network_fetches) / references)

    def clear(self) -> None:
        self._inflight.clear()
        self._usage.clear()
