"""Read-only queries over the currently installed catalog store.

Queries never wait on a reload in progress. Each call reads the store the
loader exposes at that moment and copies what it iterates, so a concurrent
rebuild can only make results incomplete, never inconsistent.
"""

from __future__ import annotations

import re
import uuid
from typing import TYPE_CHECKING, Protocol

import structlog

from ringcatalog.models.entitlement import EntitlementSummary
from ringcatalog.models.search import AppDetail, AppSearchResult, SearchInput, SearchResult
from ringcatalog.partitions import normalize_partition

if TYPE_CHECKING:
    from collections.abc import Callable

    from ringcatalog.models.app import AppDefinition
    from ringcatalog.store import CatalogStore

log = structlog.get_logger()


class StoreHolder(Protocol):
    @property
    def store(self) -> CatalogStore: ...


def _is_app_id(query: str) -> bool:
    try:
        uuid.UUID(query)
    except ValueError:
        return False
    return True


def _wildcard_pattern(query: str) -> re.Pattern[str]:
    """``Team*`` → ``^Team.*$`` (case-insensitive, everything else literal)."""
    return re.compile(re.escape(query).replace(r"\*", ".*"), re.IGNORECASE)


def _summaries(store: CatalogStore, app_id: str) -> list[EntitlementSummary]:
    return [
        EntitlementSummary(
            partition=record.partition,
            scope=record.scope,
            context=record.context,
            state=record.state,
        )
        for record in store.entitlements_for(app_id)
    ]


def _name_order(result: AppSearchResult) -> tuple[str, str, str]:
    return (result.name.casefold(), result.name, result.id)


class SearchEngine:
    def __init__(self, holder: StoreHolder) -> None:
        self._holder = holder

    def search(self, query: str = "", page_size: int = 10, page_number: int = 1) -> SearchResult:
        """Ranked, paginated search.

        - A query that parses as a UUID matches that app ID only.
        - A query containing ``*`` is a whole-value pattern over name,
          developer name and ID.
        - Anything else is a case-insensitive substring match over name,
          developer name, descriptions, keywords and ID. The empty query
          matches every app.

        Exact name matches rank first, then names containing the query, then
        the rest; each group is ordered by name.
        """
        params = SearchInput(query=query, page_size=page_size, page_number=page_number)
        q = params.query
        log.info("search", query=q, page_size=params.page_size, page_number=params.page_number)

        store = self._holder.store
        folded = q.casefold()
        if _is_app_id(q):

            def matches(app_id: str, app: AppDefinition) -> bool:
                return app_id.casefold() == folded

        elif "*" in q:
            pattern = _wildcard_pattern(q)

            def matches(app_id: str, app: AppDefinition) -> bool:
                return any(pattern.fullmatch(v) for v in (app.name, app.developer_name, app_id))

        else:

            def matches(app_id: str, app: AppDefinition) -> bool:
                haystack = [
                    app.name,
                    app.developer_name,
                    app.short_description,
                    app.long_description,
                    app_id,
                    *app.keywords,
                ]
                return any(folded in value.casefold() for value in haystack)

        results = self._collect(store, matches)
        results.sort(
            key=lambda r: (
                r.name.casefold() != folded,
                folded not in r.name.casefold(),
                *_name_order(r),
            )
        )

        total = len(results)
        start = (params.page_number - 1) * params.page_size
        return SearchResult(
            apps=results[start : start + params.page_size],
            query=q,
            total_count=total,
            page_size=params.page_size,
            page_number=params.page_number,
            has_more=params.page_number * params.page_size < total,
        )

    def get_details(self, app_id: str) -> AppDetail | None:
        """Merged view of one app, or ``None`` when no partition defines it."""
        log.info("get_details", app_id=app_id)
        store = self._holder.store
        versions = store.variants(app_id)
        if not versions:
            return None
        capabilities: dict[str, int] = {}
        for variant in versions.values():
            for name, count in variant.capabilities.items():
                capabilities[name] = max(capabilities.get(name, 0), count)
        return AppDetail(
            app=next(iter(versions.values())),
            versions=versions,
            capabilities=capabilities,
            entitlements=_summaries(store, app_id),
        )

    def find_by_developer(self, developer: str) -> list[AppSearchResult]:
        log.info("find_by_developer", developer=developer)
        needle = developer.strip().casefold()
        return self._filter(
            self._holder.store, lambda app_id, app: needle in app.developer_name.casefold()
        )

    def find_by_partition(self, partition: str) -> list[AppSearchResult]:
        """Apps defined in ``partition``; ring labels such as ``R1`` are accepted."""
        key = normalize_partition(partition)
        log.info("find_by_partition", partition=partition, key=key)
        store = self._holder.store
        return self._filter(store, lambda app_id, app: store.has_variant(app_id, key))

    def find_by_entitlement_state(self, state: str) -> list[AppSearchResult]:
        log.info("find_by_entitlement_state", state=state)
        needle = state.strip().casefold()
        store = self._holder.store
        return self._filter(
            store,
            lambda app_id, app: any(
                needle in record.state.casefold() for record in store.entitlements_for(app_id)
            ),
        )

    # ------------------------------------------------------------------

    def _filter(
        self,
        store: CatalogStore,
        predicate: Callable[[str, AppDefinition], bool],
    ) -> list[AppSearchResult]:
        results = self._collect(store, predicate)
        results.sort(key=_name_order)
        return results

    def _collect(
        self,
        store: CatalogStore,
        predicate: Callable[[str, AppDefinition], bool],
    ) -> list[AppSearchResult]:
        results = []
        for app_id in store.app_ids():
            versions = store.variants(app_id)
            if not versions:
                continue
            primary = next(iter(versions.values()))
            if predicate(app_id, primary):
                results.append(self._to_result(store, app_id, primary, versions))
        return results

    @staticmethod
    def _to_result(
        store: CatalogStore,
        app_id: str,
        primary: AppDefinition,
        versions: dict[str, AppDefinition],
    ) -> AppSearchResult:
        return AppSearchResult(
            id=app_id,
            name=primary.name,
            developer_name=primary.developer_name,
            short_description=primary.short_description,
            partitions=list(versions),
            entitlements=_summaries(store, app_id),
            small_image_url=primary.small_image_url,
            is_core_app=primary.is_core_app,
            is_teams_owned=primary.is_teams_owned,
            categories=list(primary.categories),
        )
