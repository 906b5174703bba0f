"""Super-admin endpoints: tenants, modules, quotas, audit and platform stats."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from terra_client.features.super_admin.schemas import (
    AuditLogPage,
    AvailableModule,
    SystemStats,
    Tenant,
    TenantAdmin,
    TenantCreate,
    TenantCreationResult,
    TenantUpdate,
)

if TYPE_CHECKING:
    from terra_client.infra.http import AuthenticatedClient

logger = logging.getLogger(__name__)

BASE_PATH = "/v1/super-admin"


class SuperAdminAPI:
    """Platform-wide administration.

    These endpoints are not tenant-scoped on the backend; the tenant header
    is still sent when the session has one, and is ignored there.
    """

    def __init__(self, client: AuthenticatedClient) -> None:
        self._client = client

    # ──────────────────────────────────────────────────────────────
    # Tenants
    # ──────────────────────────────────────────────────────────────

    async def list_tenants(self) -> list[Tenant]:
        data = await self._client.get(f"{BASE_PATH}/tenants")
        return [Tenant.model_validate(t) for t in data or []]

    async def get_tenant(self, tenant_id: str) -> Tenant:
        return Tenant.model_validate(await self._client.get(f"{BASE_PATH}/tenants/{tenant_id}"))

    async def create_tenant(self, payload: TenantCreate) -> TenantCreationResult:
        """Provision a tenant and its first admin."""
        result = TenantCreationResult.model_validate(
            await self._client.post(f"{BASE_PATH}/tenants", json=payload.to_wire())
        )
        logger.info(
            "Tenant created",
            extra={
                "tenant_id": result.tenant.id,
                "schema_name": result.tenant.schema_name,
                "operation": "super_admin.create_tenant",
            },
        )
        return result

    async def update_tenant(self, tenant_id: str, payload: TenantUpdate) -> Tenant:
        data = await self._client.put(f"{BASE_PATH}/tenants/{tenant_id}", json=payload.to_wire())
        return Tenant.model_validate(data)

    async def suspend_tenant(self, tenant_id: str, reason: str) -> None:
        if not reason or not reason.strip():
            raise ValueError("A suspension reason is required")
        await self._client.put(f"{BASE_PATH}/tenants/{tenant_id}/suspend", json={"reason": reason})
        logger.info("Tenant suspended", extra={"tenant_id": tenant_id, "operation": "super_admin.suspend_tenant"})

    async def activate_tenant(self, tenant_id: str) -> None:
        await self._client.put(f"{BASE_PATH}/tenants/{tenant_id}/activate")
        logger.info("Tenant activated", extra={"tenant_id": tenant_id, "operation": "super_admin.activate_tenant"})

    async def delete_tenant(self, tenant_id: str) -> None:
        await self._client.delete(f"{BASE_PATH}/tenants/{tenant_id}")
        logger.info("Tenant deleted", extra={"tenant_id": tenant_id, "operation": "super_admin.delete_tenant"})

    async def toggle_module(self, tenant_id: str, module_name: str, enabled: bool) -> None:
        """Enable or disable one module for a tenant."""
        await self._client.put(
            f"{BASE_PATH}/tenants/{tenant_id}/modules",
            json={"moduleName": module_name, "enabled": enabled},
        )
        logger.info(
            "Tenant module toggled",
            extra={"tenant_id": tenant_id, "module_name": module_name, "enabled": enabled},
        )

    async def get_tenant_modules(self, tenant_id: str) -> list[str]:
        data = await self._client.get(f"{BASE_PATH}/tenants/{tenant_id}/modules")
        return [str(m) for m in data or []]

    async def set_tenant_quotas(self, tenant_id: str, quotas: dict[str, Any]) -> None:
        await self._client.put(f"{BASE_PATH}/tenants/{tenant_id}/quotas", json={"quotas": quotas})

    async def list_tenant_admins(self, tenant_id: str) -> list[TenantAdmin]:
        data = await self._client.get(f"{BASE_PATH}/tenants/{tenant_id}/admins")
        return [TenantAdmin.model_validate(a) for a in data or []]

    # ──────────────────────────────────────────────────────────────
    # Platform
    # ──────────────────────────────────────────────────────────────

    async def list_available_modules(self) -> list[AvailableModule]:
        data = await self._client.get(f"{BASE_PATH}/modules/available")
        return [AvailableModule.model_validate(m) for m in data or []]

    async def dashboard_stats(self) -> SystemStats:
        return SystemStats.model_validate(await self._client.get(f"{BASE_PATH}/dashboard/stats") or {})

    async def schema_pool_stats(self) -> dict[str, Any]:
        return dict(await self._client.get(f"{BASE_PATH}/schema-pool/stats") or {})

    async def audit_logs(
        self,
        *,
        tenant_id: str | None = None,
        action: str | None = None,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
        page: int = 0,
        size: int = 20,
    ) -> AuditLogPage:
        params = {
            "tenantId": tenant_id,
            "action": action,
            "fromDate": from_date.isoformat() if from_date else None,
            "toDate": to_date.isoformat() if to_date else None,
            "page": page,
            "size": size,
        }
        data = await self._client.get(f"{BASE_PATH}/audit-logs", params=params)
        return AuditLogPage.model_validate(data or {})

    async def search_users(self, email: str) -> list[dict[str, Any]]:
        """Search users across all tenants by email."""
        data = await self._client.get(f"{BASE_PATH}/users/search", params={"email": email})
        if isinstance(data, dict):
            return list(data.get("users") or [])
        return list(data or [])
