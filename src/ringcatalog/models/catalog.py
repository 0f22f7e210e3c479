from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from ringcatalog.models.base import WireModel


class SourceCategory(StrEnum):
    """Which list of the configuration document a source URL came from."""

    STORE = "store"
    CORE = "core"
    PRE_APPROVED = "preApproved"
    OVERRIDE = "override"
    ENTITLEMENTS = "entitlements"


DEFINITION_CATEGORIES: tuple[SourceCategory, ...] = (
    SourceCategory.STORE,
    SourceCategory.CORE,
    SourceCategory.PRE_APPROVED,
    SourceCategory.OVERRIDE,
)


class SourceList(WireModel):
    sources: list[str] = []


class AppCatalogSection(WireModel):
    store_app_definitions: SourceList | None = None
    core_app_definitions: SourceList | None = None
    pre_approved_app_definitions: SourceList | None = None
    override_app_definitions: SourceList | None = None
    preconfigured_app_entitlements: SourceList | None = None


class CatalogAgentSection(WireModel):
    app_catalog: AppCatalogSection | None = Field(default=None, alias="AppCatalog")


class CatalogConfigDocument(WireModel):
    """Per-partition configuration document served by the config endpoint."""

    catalog: CatalogAgentSection | None = Field(default=None, alias="MicrosoftTeamsAppCatalog")

    def to_descriptor(self, partition: str) -> SourceDescriptor | None:
        """Flatten into a :class:`SourceDescriptor`, or ``None`` without an AppCatalog."""
        section = self.catalog.app_catalog if self.catalog else None
        if section is None:
            return None
        lists = {
            SourceCategory.STORE: section.store_app_definitions,
            SourceCategory.CORE: section.core_app_definitions,
            SourceCategory.PRE_APPROVED: section.pre_approved_app_definitions,
            SourceCategory.OVERRIDE: section.override_app_definitions,
            SourceCategory.ENTITLEMENTS: section.preconfigured_app_entitlements,
        }
        return SourceDescriptor(
            partition=partition,
            sources={
                category: [url for url in source_list.sources if url]
                for category, source_list in lists.items()
                if source_list is not None and source_list.sources
            },
        )


class SourceDescriptor(BaseModel):
    """Source URLs for one partition, grouped by category."""

    partition: str
    sources: dict[SourceCategory, list[str]] = {}

    def urls(self, category: SourceCategory) -> list[str]:
        return self.sources.get(category, [])
