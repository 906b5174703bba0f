"""Pydantic schemas for authentication payloads."""

from __future__ import annotations

from pydantic import Field

from terra_client.core.schemas import CamelModel


class TenantInfo(CamelModel):
    """A tenant an email address can sign in to."""

    tenant_id: str
    tenant_name: str | None = None
    schema_name: str | None = None


class DiscoveryResult(CamelModel):
    tenants: list[TenantInfo] = Field(default_factory=list)

    @property
    def single_tenant(self) -> TenantInfo | None:
        """The only tenant when exactly one matched, else None."""
        return self.tenants[0] if len(self.tenants) == 1 else None


class UserProfile(CamelModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    tenant_id: str | None = None
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)
    bundle_names: list[str] = Field(default_factory=list)


class LoginResult(CamelModel):
    token: str = Field(min_length=1)
    refresh_token: str | None = None
    expires_in: int | None = None
    user: UserProfile
