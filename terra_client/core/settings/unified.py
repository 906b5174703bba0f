"""Unified settings composition for convenient access.

Usage:
    from terra_client.core.settings import get_settings

    settings = get_settings()
    print(settings.client.base_url)
    print(settings.logging.level)

Each nested settings class still respects its own env prefix.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .client import ClientSettings
from .logs import LoggingSettings


class Settings(BaseSettings):
    """All settings domains composed into one object."""

    client: ClientSettings = Field(default_factory=ClientSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached unified settings."""
    return Settings()
