"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from terra_client.core.settings.loader import get_client_settings

    settings = get_client_settings()  # First call: loads and validates
    settings = get_client_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    get_client_settings.cache_clear()

    Or override with custom values:
    settings = ClientSettings(base_url="http://test/api")
"""

from __future__ import annotations

from functools import lru_cache

from .client import ClientSettings
from .logs import LoggingSettings


@lru_cache(maxsize=1)
def get_client_settings() -> ClientSettings:
    """Get cached API client settings.

    Returns:
        Validated and frozen ClientSettings instance.
    """
    return ClientSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_caches() -> None:
    """Clear all settings caches (tests and config reloads)."""
    from .unified import get_settings

    get_client_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_settings.cache_clear()
