"""Shared fixtures: settings pointed at mocked endpoints."""

from __future__ import annotations

import pytest

from ringcatalog.config import CatalogSettings, Settings

CONFIG_URL = "https://config.test/catalog"


@pytest.fixture()
def catalog_settings() -> CatalogSettings:
    return CatalogSettings(
        config_url=CONFIG_URL,
        partitions=["general", "ring1", "ring2"],
    )


@pytest.fixture()
def settings(catalog_settings: CatalogSettings) -> Settings:
    return Settings(catalog=catalog_settings)
