"""Per-partition configuration discovery with a time-based in-memory cache.

A partition that cannot be resolved is logged and left out of the result;
resolution of the other partitions carries on. Resolved descriptors are
cached for ``config_ttl_hours`` and survive reload cycles.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from ringcatalog.config import CatalogSettings
from ringcatalog.errors import CatalogError, ErrorCode
from ringcatalog.models.cache import DescriptorCacheEntry
from ringcatalog.models.catalog import CatalogConfigDocument

if TYPE_CHECKING:
    from ringcatalog.fetcher import Fetcher
    from ringcatalog.models.catalog import SourceDescriptor

log = structlog.get_logger()


class ConfigurationResolver:
    def __init__(self, fetcher: Fetcher, settings: CatalogSettings | None = None) -> None:
        self._fetcher = fetcher
        self._settings = settings or CatalogSettings()
        self._cache: dict[str, DescriptorCacheEntry] = {}

    @property
    def partitions(self) -> list[str]:
        return list(self._settings.partitions)

    async def resolve_all(self) -> list[SourceDescriptor]:
        """Resolve every configured partition concurrently.

        Returns descriptors in configured partition order; failed partitions
        are absent, so the list may be empty.
        """
        results = await asyncio.gather(*(self.resolve(p) for p in self._settings.partitions))
        descriptors = [d for d in results if d is not None]
        log.info(
            "configurations_resolved",
            resolved=len(descriptors),
            configured=len(self._settings.partitions),
        )
        return descriptors

    async def resolve(self, partition: str) -> SourceDescriptor | None:
        """Return the descriptor for ``partition`` or ``None`` if it is unavailable."""
        entry = self._cache.get(partition)
        if entry is not None and not entry.stale:
            log.debug("configuration_cache_hit", partition=partition)
            return entry.descriptor

        try:
            descriptor = await self._load(partition)
        except CatalogError as exc:
            log.warning(
                "configuration_unavailable",
                partition=partition,
                code=exc.code,
                error=exc.message,
            )
            return None

        now = datetime.now(UTC)
        self._cache[partition] = DescriptorCacheEntry(
            partition=partition,
            descriptor=descriptor,
            fetched_at=now,
            expires_at=now + timedelta(hours=self._settings.config_ttl_hours),
        )
        log.info("configuration_loaded", partition=partition)
        return descriptor

    def invalidate(self) -> None:
        self._cache.clear()

    def config_params(self, partition: str) -> dict[str, str] | None:
        """Query parameters selecting ``partition``; the default partition has none."""
        if partition == self._settings.default_partition:
            return None
        return {self._settings.partition_param: partition}

    async def _load(self, partition: str) -> SourceDescriptor:
        try:
            content = await self._fetcher.fetch(
                self._settings.config_url, params=self.config_params(partition)
            )
        except CatalogError as exc:
            raise CatalogError(
                ErrorCode.CONFIG_FETCH_FAILED,
                f"Configuration for {partition!r} unavailable: {exc.message}",
                recoverable=exc.recoverable,
            ) from exc

        try:
            document = CatalogConfigDocument.model_validate_json(content)
        except ValidationError as exc:
            raise CatalogError(
                ErrorCode.CONFIG_INVALID,
                f"Configuration for {partition!r} is not valid JSON: {exc.error_count()} error(s)",
            ) from exc

        descriptor = document.to_descriptor(partition)
        if descriptor is None:
            raise CatalogError(
                ErrorCode.CONFIG_INVALID,
                f"Configuration for {partition!r} has no AppCatalog section",
            )
        return descriptor
