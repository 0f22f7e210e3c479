"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (RINGCATALOG__CATALOG__CONFIG_TTL_HOURS=2)
  2. ringcatalog.yaml       (searched in cwd, then the platform user config dir)
  3. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from ringcatalog.partitions import DEFAULT_PARTITION, KNOWN_PARTITIONS

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("ringcatalog")

_DEFAULT_CONFIG_URL = (
    "https://config.edge.skype.com/config/v1/MicrosoftTeams/1.0.0.0"
    "?agents=MicrosoftTeamsAppCatalog"
)

_DEFAULT_HEADERS = {
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
    "Origin": "https://teams.microsoft.com",
    "Referer": "https://teams.microsoft.com/",
}


def _find_config_file() -> str | None:
    """Return the path of the first ringcatalog.yaml found, or None."""
    candidates = [
        Path("ringcatalog.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "ringcatalog.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class CatalogSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    config_url: str = _DEFAULT_CONFIG_URL
    # Query parameter naming the partition; omitted for default_partition
    partition_param: str = "AudienceGroup"
    default_partition: str = DEFAULT_PARTITION
    partitions: list[str] = Field(default_factory=lambda: list(KNOWN_PARTITIONS))
    config_ttl_hours: float = 1.0


class FetcherSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 10.0
    max_connections: int = 20
    headers: dict[str, str] = Field(default_factory=lambda: dict(_DEFAULT_HEADERS))


class RefreshSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    interval_hours: float = 1.0


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: RINGCATALOG__FETCHER__MAX_CONNECTIONS=50
        env_prefix="RINGCATALOG__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    catalog: CatalogSettings = CatalogSettings()
    fetcher: FetcherSettings = FetcherSettings()
    refresh: RefreshSettings = RefreshSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
