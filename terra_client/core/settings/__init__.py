"""Modular Pydantic Settings v2 configuration.

Import settings via cached loaders:
    from terra_client.core.settings import get_client_settings

Or use unified settings for access to all domains:
    from terra_client.core.settings import get_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. YAML/conf.d files (optional, local/dev)
    3. Environment variables (production)
    4. .env file (development only)
    5. secrets_dir (Kubernetes/Docker secrets)
"""

from __future__ import annotations

from .client import ClientSettings
from .loader import clear_all_caches, get_client_settings, get_logging_settings
from .logs import LoggingSettings
from .unified import Settings, get_settings

__all__ = [
    "ClientSettings",
    "LoggingSettings",
    "Settings",
    "clear_all_caches",
    "get_client_settings",
    "get_logging_settings",
    "get_settings",
]
