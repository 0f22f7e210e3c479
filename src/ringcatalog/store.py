"""In-memory entity and entitlement stores for one reload cycle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ringcatalog.models.app import AppDefinition
    from ringcatalog.models.entitlement import EntitlementRecord


@dataclass
class CatalogStore:
    """Apps and entitlements merged across partitions.

    Writers only ever insert-if-absent, so the first variant stored for an
    (app ID, partition) pair and the first record stored for an
    (app ID, entitlement key) pair are never replaced within a cycle.
    """

    # app ID → partition → variant
    apps: dict[str, dict[str, AppDefinition]] = field(default_factory=dict)

    # app ID → "partition.scope.context" → record
    entitlements: dict[str, dict[str, EntitlementRecord]] = field(default_factory=dict)

    def add_variant(self, app: AppDefinition) -> bool:
        """Store ``app`` under its partition; returns ``False`` if one was already there."""
        variants = self.apps.setdefault(app.id, {})
        if app.partition in variants:
            return False
        variants[app.partition] = app
        return True

    def has_variant(self, app_id: str, partition: str) -> bool:
        return partition in self.apps.get(app_id, {})

    def add_entitlement(self, record: EntitlementRecord) -> bool:
        """Store ``record`` if its app is defined in its partition and the key is new."""
        if not self.has_variant(record.app_id, record.partition):
            return False
        records = self.entitlements.setdefault(record.app_id, {})
        if record.key in records:
            return False
        records[record.key] = record
        return True

    def variants(self, app_id: str) -> dict[str, AppDefinition]:
        return dict(self.apps.get(app_id, {}))

    def entitlements_for(self, app_id: str) -> list[EntitlementRecord]:
        return list(self.entitlements.get(app_id, {}).values())

    def app_ids(self) -> list[str]:
        return list(self.apps)

    @property
    def entity_count(self) -> int:
        return len(self.apps)

    @property
    def variant_count(self) -> int:
        return sum(len(v) for v in list(self.apps.values()))

    @property
    def entitlement_count(self) -> int:
        return sum(len(r) for r in list(self.entitlements.values()))
