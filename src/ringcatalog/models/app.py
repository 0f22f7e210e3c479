from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from ringcatalog.models.base import WireModel
from ringcatalog.models.catalog import SourceCategory


class AppDefinition(WireModel):
    """One partition's variant of a catalog app.

    Nested capability blocks (bots, tabs, extensions, ...) are kept as raw
    JSON objects; only their presence and count matter to search and detail
    views.
    """

    id: str = ""
    name: str = ""
    version: str = ""
    manifest_version: str = ""
    short_description: str = ""
    long_description: str = ""

    developer_name: str = ""
    developer_url: str | None = None
    privacy_url: str | None = None
    terms_of_use_url: str | None = None

    small_image_url: str | None = None
    large_image_url: str | None = None
    accent_color: str | None = None

    categories: list[str] = []
    industries: list[str] = []
    keywords: list[str] = []

    bots: list[dict[str, Any]] = []
    static_tabs: list[dict[str, Any]] = []
    gallery_tabs: list[dict[str, Any]] = []
    connectors: list[dict[str, Any]] = []
    input_extensions: list[dict[str, Any]] = []
    copilot_gpts: list[dict[str, Any]] = []
    plugins: list[dict[str, Any]] = []

    permissions: list[str] = []
    valid_domains: list[str] = []
    supported_languages: list[str] = []
    supported_platforms: list[str] = []

    is_core_app: bool = False
    is_teams_owned: bool = False
    is_full_screen: bool = False
    is_pinnable: bool = False
    is_blockable: bool = False
    is_preinstallable: bool = False
    is_tenant_configurable: bool = False
    is_meta_os_app: bool = False
    is_uninstallable: bool = False
    copilot_enabled: bool = False

    app_availability_status: str | None = None
    last_updated_at: datetime | None = None

    # Set by the loader, never read from the wire
    source_category: SourceCategory | None = Field(default=None, exclude=True)
    partition: str = Field(default="", exclude=True)

    @property
    def capabilities(self) -> dict[str, int]:
        """Non-empty capability blocks and how many entries each carries."""
        blocks = {
            "bots": self.bots,
            "staticTabs": self.static_tabs,
            "galleryTabs": self.gallery_tabs,
            "connectors": self.connectors,
            "inputExtensions": self.input_extensions,
            "copilotGpts": self.copilot_gpts,
            "plugins": self.plugins,
        }
        return {name: len(items) for name, items in blocks.items() if items}


class AppDefinitionList(WireModel):
    app_definitions: list[AppDefinition] = []


class AppDefinitionResponse(WireModel):
    """``{"value": {"appDefinitions": [...]}}``"""

    value: AppDefinitionList | None = None

    @property
    def apps(self) -> list[AppDefinition]:
        return self.value.app_definitions if self.value else []
