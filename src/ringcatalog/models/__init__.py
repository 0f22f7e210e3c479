from __future__ import annotations

from ringcatalog.models.app import AppDefinition, AppDefinitionResponse
from ringcatalog.models.cache import DescriptorCacheEntry
from ringcatalog.models.catalog import (
    DEFINITION_CATEGORIES,
    CatalogConfigDocument,
    SourceCategory,
    SourceDescriptor,
)
from ringcatalog.models.entitlement import (
    AppEntitlement,
    AppEntitlements,
    EntitlementRecord,
    EntitlementResponse,
    EntitlementSummary,
    ServicePlanIdSet,
)
from ringcatalog.models.search import AppDetail, AppSearchResult, SearchInput, SearchResult
from ringcatalog.models.status import LoadingStatus, LoadState

__all__ = [
    # catalog configuration
    "CatalogConfigDocument",
    "SourceCategory",
    "SourceDescriptor",
    "DEFINITION_CATEGORIES",
    # apps
    "AppDefinition",
    "AppDefinitionResponse",
    # entitlements
    "AppEntitlement",
    "AppEntitlements",
    "EntitlementResponse",
    "EntitlementRecord",
    "EntitlementSummary",
    "ServicePlanIdSet",
    # cache
    "DescriptorCacheEntry",
    # search
    "SearchInput",
    "AppSearchResult",
    "SearchResult",
    "AppDetail",
    # status
    "LoadState",
    "LoadingStatus",
]
