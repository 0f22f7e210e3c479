from __future__ import annotations

from pydantic import BaseModel, field_validator

from ringcatalog.models.app import AppDefinition
from ringcatalog.models.entitlement import EntitlementSummary


class SearchInput(BaseModel):
    query: str = ""
    page_size: int = 10
    page_number: int = 1

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        return v.strip()

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("page_size must be >= 1")
        return v

    @field_validator("page_number")
    @classmethod
    def validate_page_number(cls, v: int) -> int:
        if v < 1:
            raise ValueError("page_number must be >= 1")
        return v


class AppSearchResult(BaseModel):
    """Single app in a search or filter result."""

    id: str
    name: str
    developer_name: str
    short_description: str
    partitions: list[str]
    entitlements: list[EntitlementSummary]
    small_image_url: str | None
    is_core_app: bool
    is_teams_owned: bool
    categories: list[str]


class SearchResult(BaseModel):
    apps: list[AppSearchResult]
    query: str
    total_count: int
    page_size: int
    page_number: int
    has_more: bool


class AppDetail(BaseModel):
    """Merged view of one app across every partition that defines it."""

    app: AppDefinition  # First variant loaded for the app
    versions: dict[str, AppDefinition]  # partition → variant
    capabilities: dict[str, int]  # block name → largest entry count in any variant
    entitlements: list[EntitlementSummary]
