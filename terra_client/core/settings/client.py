"""API client settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_client_yaml_source

DEFAULT_TENANT_INDEPENDENT_PATHS: tuple[str, ...] = (
    "/auth/",
    "/discovery/",
    "/v1/auth/",
    "/v1/discovery/",
)
DEFAULT_USER_ACTION_ENDPOINTS: tuple[str, ...] = ("/bundles", "/users/")


class ClientSettings(BaseSettings):
    """Settings for the authenticated CRM API client.

    Environment variables use TERRA_ prefix.
    Example: TERRA_BASE_URL=https://crm.example.com/api, TERRA_REFRESH_TIMEOUT=10
    """

    base_url: str = Field(
        default="http://localhost:8080/api",
        min_length=1,
        description="Base URL of the CRM REST API (request paths are appended to it)",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Per-request timeout in seconds",
    )
    refresh_timeout: float = Field(
        default=15.0,
        gt=0,
        le=600,
        description="Upper bound in seconds for a token refresh; queued requests fail when it expires",
    )
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    refresh_path: str = Field(
        default="/v1/auth/refresh",
        pattern=r"^/.*$",
        description="Token refresh endpoint path",
    )
    credential_paths: list[str] = Field(
        default_factory=lambda: ["/auth/login", "/v1/auth/logout"],
        description="URL fragments whose 401 is final, like the refresh endpoint itself",
    )
    login_route: str = Field(
        default="/login",
        description="Route passed to the unauthenticated callback",
    )
    forbidden_route: str = Field(
        default="/forbidden",
        description="Route passed to the forbidden callback",
    )
    forbidden_aliases: list[str] = Field(
        default_factory=lambda: ["/forbidden", "/403"],
        description="Routes considered 'already on the forbidden page'",
    )

    tenant_independent_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TENANT_INDEPENDENT_PATHS),
        description="URL fragments for which no X-Tenant-ID header is attached",
    )
    user_action_endpoints: list[str] = Field(
        default_factory=lambda: list(DEFAULT_USER_ACTION_ENDPOINTS),
        description="URL fragments whose 403 errors are surfaced to the caller instead of redirecting",
    )

    session_file: Path | None = Field(
        default=None,
        description="Optional JSON file persisting tenant id and user profile between runs",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so joined paths never contain '//'."""
        return v.rstrip("/")

    @field_validator("login_route", "forbidden_route")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        """Routes are absolute paths."""
        return v if v.startswith("/") else f"/{v}"

    def is_tenant_independent(self, url: str) -> bool:
        """Return True when the URL should be sent without a tenant header."""
        return any(fragment in url for fragment in self.tenant_independent_paths)

    def is_credential_call(self, url: str) -> bool:
        """Return True for the refresh endpoint and other calls that must never trigger a refresh."""
        return self.refresh_path in url or any(fragment in url for fragment in self.credential_paths)

    def is_user_action(self, url: str) -> bool:
        """Return True when a 403 on this URL should be surfaced inline."""
        return any(fragment in url for fragment in self.user_action_endpoints)

    model_config = SettingsConfigDict(
        env_prefix="TERRA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Customize settings source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_client_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
