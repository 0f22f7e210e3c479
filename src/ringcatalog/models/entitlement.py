from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from ringcatalog.models.base import WireModel

Scope = Literal["user", "team", "tenant"]
SCOPES: tuple[Scope, ...] = ("user", "team", "tenant")


class ServicePlanIdSet(WireModel):
    service_plan_ids: list[str] = []


class AppEntitlement(WireModel):
    """Raw entitlement record; sources name the app under ``id`` or ``appId``."""

    id: str | None = None
    app_id: str | None = None
    state: str = ""
    required_service_plan_id_sets: list[ServicePlanIdSet] = []

    @property
    def target_app_id(self) -> str | None:
        return self.id or self.app_id


class AppEntitlements(WireModel):
    # context name → records, per scope
    user: dict[str, list[AppEntitlement]] = {}
    team: dict[str, list[AppEntitlement]] = {}
    tenant: dict[str, list[AppEntitlement]] = {}

    def by_scope(self) -> dict[Scope, dict[str, list[AppEntitlement]]]:
        return {"user": self.user, "team": self.team, "tenant": self.tenant}


class EntitlementValue(WireModel):
    app_entitlements: AppEntitlements | None = None


class EntitlementResponse(WireModel):
    """``{"value": {"appEntitlements": {"user": {...}, "team": {...}, "tenant": {...}}}}``"""

    value: EntitlementValue | None = None

    @property
    def entitlements(self) -> AppEntitlements | None:
        return self.value.app_entitlements if self.value else None


class EntitlementRecord(BaseModel):
    """Entitlement retained for an app that has a definition in the same partition."""

    app_id: str
    partition: str
    scope: Scope
    context: str
    state: str
    required_service_plan_id_sets: list[ServicePlanIdSet] = []

    @property
    def key(self) -> str:
        return make_entitlement_key(self.partition, self.scope, self.context)


class EntitlementSummary(BaseModel):
    partition: str
    scope: Scope
    context: str
    state: str


def make_entitlement_key(partition: str, scope: str, context: str) -> str:
    return f"{partition}.{scope}.{context}"
