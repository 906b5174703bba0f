"""Pydantic schemas for the super-admin console."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import Field

from terra_client.core.schemas import CamelModel


class TenantStatus(StrEnum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"


class Tenant(CamelModel):
    id: str
    name: str
    schema_name: str | None = None
    status: str | None = None
    quota_limits: dict[str, Any] = Field(default_factory=dict)
    assigned_modules: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_suspended(self) -> bool:
        return self.status == TenantStatus.SUSPENDED


class TenantCreate(CamelModel):
    """Payload for provisioning a tenant with its first admin."""

    tenant_name: str = Field(min_length=1)
    admin_first_name: str
    admin_last_name: str
    admin_email: str
    admin_password: str = Field(min_length=1, repr=False)
    module_names: list[str] = Field(default_factory=list)


class TenantUpdate(CamelModel):
    name: str | None = None
    domain: str | None = None
    max_users: int | None = None


class TenantAdmin(CamelModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    tenant_id: str | None = None
    roles: list[str] = Field(default_factory=list)
    enabled: bool | None = None


class TenantCreationResult(CamelModel):
    """A provisioned tenant together with its first admin."""

    tenant: Tenant
    admin: TenantAdmin | None = None


class AvailableModule(CamelModel):
    """A MODULE-level permission that can be enabled for a tenant."""

    name: str
    description: str | None = None


class SystemStats(CamelModel):
    total_tenants: int = 0
    active_tenants: int = 0
    suspended_tenants: int = 0
    total_users: int = 0
    total_audit_logs: int = 0
    schema_pool_ready: int = 0
    schema_pool_assigned: int = 0
    schema_pool_error: int = 0
    last_tenant_created: datetime | None = None
    last_audit_log: datetime | None = None


class AuditLogEntry(CamelModel):
    id: str
    user_id: str | None = None
    user_email: str | None = None
    action: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    tenant_id: str | None = None
    tenant_name: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None


class AuditLogPage(CamelModel):
    """One page of audit log entries."""

    content: list[AuditLogEntry] = Field(default_factory=list)
    page: int = 0
    size: int = 20
    total_elements: int = 0
    total_pages: int = 0
