from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel

from ringcatalog.models.catalog import SourceDescriptor


class DescriptorCacheEntry(BaseModel):
    """Cached source descriptor for one partition."""

    partition: str
    descriptor: SourceDescriptor
    fetched_at: datetime
    expires_at: datetime

    @property
    def stale(self) -> bool:
        return datetime.now(UTC) >= self.expires_at
