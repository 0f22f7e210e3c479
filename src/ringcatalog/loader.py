"""Reload cycle: resolve partitions, merge app definitions, attach entitlements.

One cycle runs at a time. A cycle installs a fresh :class:`CatalogStore` as
soon as it starts and fills it in place, so readers may observe a partially
rebuilt catalog while ``state`` is ``loading``.

Failures of a single partition configuration or a single source URL, of any
kind, are recorded as warnings in the status error list and the cycle carries
on. The cycle ends as ``failed`` only when no partition resolves or an error
occurs outside any one source; whatever was merged by then is kept.
"""

from __future__ import annotations

import asyncio
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from ringcatalog.errors import CatalogError, ErrorCode
from ringcatalog.models.app import AppDefinitionResponse
from ringcatalog.models.catalog import DEFINITION_CATEGORIES, SourceCategory
from ringcatalog.models.entitlement import EntitlementRecord, EntitlementResponse
from ringcatalog.models.status import LoadingStatus, LoadState
from ringcatalog.store import CatalogStore

if TYPE_CHECKING:
    from ringcatalog.config_resolver import ConfigurationResolver
    from ringcatalog.fetch_cache import FetchCache
    from ringcatalog.models.catalog import SourceDescriptor

log = structlog.get_logger()

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _describe(exc: BaseException) -> str:
    """Message of the first leaf exception, unwrapping task-group errors."""
    while isinstance(exc, BaseExceptionGroup) and exc.exceptions:
        exc = exc.exceptions[0]
    return str(exc) or type(exc).__name__


class CatalogLoader:
    def __init__(self, resolver: ConfigurationResolver, fetch_cache: FetchCache) -> None:
        self._resolver = resolver
        self._fetch_cache = fetch_cache
        self._store = CatalogStore()
        self._state = LoadState.IDLE
        self._errors: list[str] = []
        self._started_at: datetime | None = None
        self._last_load_time: datetime | None = None
        self._load_duration: float | None = None
        self._partitions_resolved = 0

    @property
    def store(self) -> CatalogStore:
        """The store readers should query right now."""
        return self._store

    @property
    def state(self) -> LoadState:
        return self._state

    async def load_all(self) -> bool:
        """Run one reload cycle.

        Returns ``True`` when the cycle completed, ``False`` when another
        cycle is already loading or this one failed.
        """
        if self._state is LoadState.LOADING:
            log.info("reload_rejected", reason="already_loading")
            return False

        # Everything up to the first await runs atomically on the event loop
        self._state = LoadState.LOADING
        self._errors = []
        self._fetch_cache.clear()
        self._store = CatalogStore()
        self._partitions_resolved = 0
        self._load_duration = None
        self._started_at = datetime.now(UTC)
        started = time.monotonic()
        log.info("reload_started")

        try:
            descriptors = await self._resolve()
            await self._load_definitions(descriptors)
            await self._load_entitlements(descriptors)
        except Exception as exc:
            self._load_duration = time.monotonic() - started
            self._errors.append(f"Data loading failed: {_describe(exc)}")
            self._state = LoadState.FAILED
            log.error("reload_failed", error=_describe(exc), exc_info=True)
            return False

        self._load_duration = time.monotonic() - started
        self._last_load_time = datetime.now(UTC)
        self._state = LoadState.COMPLETE
        log.info(
            "reload_complete",
            duration_seconds=round(self._load_duration, 3),
            apps=self._store.entity_count,
            variants=self._store.variant_count,
            entitlements=self._store.entitlement_count,
            cache_efficiency=round(self._fetch_cache.cache_efficiency, 3),
            warnings=len(self._errors),
        )
        return True

    def get_status(self) -> LoadingStatus:
        store = self._store
        return LoadingStatus(
            state=self._state,
            is_loading=self._state is LoadState.LOADING,
            is_complete=self._state is LoadState.COMPLETE,
            started_at=self._started_at,
            last_load_time=self._last_load_time,
            load_duration_seconds=self._load_duration,
            partitions_configured=len(self._resolver.partitions),
            partitions_resolved=self._partitions_resolved,
            entities_loaded=store.entity_count,
            variants_loaded=store.variant_count,
            entitlements_loaded=store.entitlement_count,
            source_references=self._fetch_cache.source_references,
            network_fetches=self._fetch_cache.network_fetches,
            cache_efficiency=self._fetch_cache.cache_efficiency,
            errors=list(self._errors),
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    async def _resolve(self) -> list[SourceDescriptor]:
        descriptors = await self._resolver.resolve_all()
        self._partitions_resolved = len(descriptors)
        resolved = {d.partition for d in descriptors}
        for partition in self._resolver.partitions:
            if partition not in resolved:
                self._errors.append(f"Configuration unavailable for partition {partition}")
        if not descriptors:
            raise CatalogError(
                ErrorCode.RELOAD_FAILED,
                "No partition configurations could be resolved",
                recoverable=True,
            )
        return descriptors

    async def _load_definitions(self, descriptors: list[SourceDescriptor]) -> None:
        async with asyncio.TaskGroup() as tg:
            for descriptor in descriptors:
                for category in DEFINITION_CATEGORIES:
                    for url in descriptor.urls(category):
                        tg.create_task(
                            self._load_definition_source(descriptor.partition, category, url)
                        )
        log.info(
            "definitions_loaded",
            apps=self._store.entity_count,
            variants=self._store.variant_count,
        )

    async def _load_entitlements(self, descriptors: list[SourceDescriptor]) -> None:
        async with asyncio.TaskGroup() as tg:
            for descriptor in descriptors:
                for url in descriptor.urls(SourceCategory.ENTITLEMENTS):
                    tg.create_task(self._load_entitlement_source(descriptor.partition, url))
        log.info("entitlements_loaded", entitlements=self._store.entitlement_count)

    # ------------------------------------------------------------------
    # Single sources
    # ------------------------------------------------------------------

    async def _load_definition_source(
        self, partition: str, category: SourceCategory, url: str
    ) -> None:
        label = f"{category} apps for {partition}"
        try:
            response = await self._read_source(partition, url, AppDefinitionResponse)
            self._merge_definitions(partition, category, url, response)
        except CatalogError as exc:
            log.warning("definition_source_failed", partition=partition, url=url, code=exc.code)
            self._errors.append(f"Failed to load {label}: {exc.message}")
        except Exception as exc:
            log.error("definition_source_error", partition=partition, url=url, exc_info=True)
            self._errors.append(f"Failed to load {label}: {_describe(exc)}")

    async def _load_entitlement_source(self, partition: str, url: str) -> None:
        label = f"entitlements for {partition}"
        try:
            response = await self._read_source(partition, url, EntitlementResponse)
            self._merge_entitlements(partition, url, response)
        except CatalogError as exc:
            log.warning("entitlement_source_failed", partition=partition, url=url, code=exc.code)
            self._errors.append(f"Failed to load {label}: {exc.message}")
        except Exception as exc:
            log.error("entitlement_source_error", partition=partition, url=url, exc_info=True)
            self._errors.append(f"Failed to load {label}: {_describe(exc)}")

    async def _read_source(self, partition: str, url: str, model: type[_ModelT]) -> _ModelT:
        """Fetch ``url`` through the cache and parse it as ``model``.

        Raises:
            CatalogError: ``SOURCE_FETCH_FAILED`` when the source is unavailable,
                ``SOURCE_INVALID`` when its body does not parse.
        """
        self._fetch_cache.track_usage(url, partition)
        content = await self._fetch_cache.fetch(url)
        if content is None:
            raise CatalogError(ErrorCode.SOURCE_FETCH_FAILED, f"{url} unavailable")
        try:
            return model.model_validate_json(content)
        except ValidationError as exc:
            raise CatalogError(ErrorCode.SOURCE_INVALID, f"invalid JSON from {url}") from exc

    def _merge_definitions(
        self,
        partition: str,
        category: SourceCategory,
        url: str,
        response: AppDefinitionResponse,
    ) -> None:
        added = 0
        for app in response.apps:
            if not app.id:
                continue
            variant = app.model_copy(update={"partition": partition, "source_category": category})
            if self._store.add_variant(variant):
                added += 1
        log.debug(
            "definition_source_loaded",
            partition=partition,
            category=str(category),
            url=url,
            parsed=len(response.apps),
            added=added,
        )

    def _merge_entitlements(self, partition: str, url: str, response: EntitlementResponse) -> None:
        entitlements = response.entitlements
        if entitlements is None:
            return

        kept = dropped = 0
        for scope, contexts in entitlements.by_scope().items():
            for context, raw_records in contexts.items():
                for raw in raw_records:
                    app_id = raw.target_app_id
                    if not app_id:
                        continue
                    record = EntitlementRecord(
                        app_id=app_id,
                        partition=partition,
                        scope=scope,
                        context=context,
                        state=raw.state,
                        required_service_plan_id_sets=raw.required_service_plan_id_sets,
                    )
                    if self._store.add_entitlement(record):
                        kept += 1
                    else:
                        dropped += 1
        log.debug(
            "entitlement_source_loaded",
            partition=partition,
            url=url,
            kept=kept,
            dropped=dropped,
        )
