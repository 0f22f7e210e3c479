"""Ring-partitioned app catalog aggregation and search."""

from __future__ import annotations

from ringcatalog.loader import CatalogLoader
from ringcatalog.search import SearchEngine
from ringcatalog.state import AppState, build_app_state, create_app_state

__all__ = [
    "AppState",
    "CatalogLoader",
    "SearchEngine",
    "build_app_state",
    "create_app_state",
]
