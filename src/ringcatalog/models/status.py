from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class LoadState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    COMPLETE = "complete"
    FAILED = "failed"


class LoadingStatus(BaseModel):
    """Point-in-time view of the current (or last) reload cycle."""

    state: LoadState
    is_loading: bool
    is_complete: bool
    started_at: datetime | None
    last_load_time: datetime | None  # When the last successful cycle finished
    load_duration_seconds: float | None
    partitions_configured: int
    partitions_resolved: int
    entities_loaded: int  # Distinct app IDs
    variants_loaded: int  # (app ID, partition) pairs
    entitlements_loaded: int
    source_references: int
    network_fetches: int
    cache_efficiency: float  # 0.0–1.0
    errors: list[str]
