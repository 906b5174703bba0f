"""Super-admin console API."""

from terra_client.features.super_admin.client import SuperAdminAPI
from terra_client.features.super_admin.schemas import (
    AuditLogEntry,
    AuditLogPage,
    AvailableModule,
    SystemStats,
    Tenant,
    TenantAdmin,
    TenantCreate,
    TenantCreationResult,
    TenantStatus,
    TenantUpdate,
)

__all__ = [
    "AuditLogEntry",
    "AuditLogPage",
    "AvailableModule",
    "SuperAdminAPI",
    "SystemStats",
    "Tenant",
    "TenantAdmin",
    "TenantCreate",
    "TenantCreationResult",
    "TenantStatus",
    "TenantUpdate",
]
