"""Tenant-admin permission and bundle endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from terra_client.core.exceptions import ApiError
from terra_client.features.permissions.schemas import Bundle, Module, Permission
from terra_client.features.permissions.sync import PermissionSync

if TYPE_CHECKING:
    from terra_client.infra.http import AuthenticatedClient

logger = logging.getLogger(__name__)

BASE_PATH = "/v1/tenant-admin"


class PermissionAPI:
    """Permissions, modules and bundles of the current tenant.

    Bundle mutations that can change the signed-in user's own permissions
    trigger a best-effort permission sync afterwards.
    """

    def __init__(self, client: AuthenticatedClient) -> None:
        self._client = client
        self.sync = PermissionSync(client, self)

    async def list_permissions(self) -> list[Permission]:
        return [Permission.model_validate(p) for p in await self._list("/permissions")]

    async def list_modules(self) -> list[Module]:
        return [Module.model_validate(m) for m in await self._list("/modules")]

    async def list_bundles(self) -> list[Bundle]:
        return [Bundle.model_validate(b) for b in await self._list("/bundles")]

    async def get_bundle(self, bundle_id: str) -> Bundle:
        return Bundle.model_validate(await self._client.get(f"{BASE_PATH}/bundles/{bundle_id}"))

    async def list_user_bundles(self, user_id: str) -> list[Bundle]:
        return [Bundle.model_validate(b) for b in await self._list(f"/users/{user_id}/bundles")]

    async def list_user_permissions(self, user_id: str) -> list[str]:
        return [str(p) for p in await self._list(f"/users/{user_id}/permissions")]

    async def create_bundle(
        self,
        name: str,
        permission_ids: list[str],
        description: str | None = None,
    ) -> Bundle:
        data = await self._client.post(
            f"{BASE_PATH}/bundles",
            json={"name": name, "description": description, "permissionIds": permission_ids},
        )
        bundle = Bundle.model_validate(data)
        logger.info(
            "Permission bundle created",
            extra={"bundle_id": bundle.id, "permission_count": len(permission_ids)},
        )
        await self.sync.refresh_quietly()
        return bundle

    async def update_bundle(self, bundle_id: str, permission_ids: list[str]) -> Bundle:
        data = await self._client.put(
            f"{BASE_PATH}/bundles/{bundle_id}",
            json={"permissionIds": permission_ids},
        )
        bundle = Bundle.model_validate(data)
        logger.info("Permission bundle updated", extra={"bundle_id": bundle_id})
        await self._sync_if_holding(bundle_id)
        return bundle

    async def delete_bundle(self, bundle_id: str) -> None:
        await self._client.delete(f"{BASE_PATH}/bundles/{bundle_id}")
        logger.info("Permission bundle deleted", extra={"bundle_id": bundle_id})
        await self.sync.refresh_quietly()

    async def assign_bundle(self, bundle_id: str, user_id: str) -> None:
        await self._client.post(f"{BASE_PATH}/bundles/{bundle_id}/assign/{user_id}")
        logger.info("Permission bundle assigned", extra={"bundle_id": bundle_id, "user_id": user_id})
        if user_id == self._client.session.user_id:
            await self.sync.refresh_quietly()

    async def unassign_bundle(self, bundle_id: str, user_id: str) -> None:
        await self._client.delete(f"{BASE_PATH}/bundles/{bundle_id}/users/{user_id}")
        logger.info("Permission bundle unassigned", extra={"bundle_id": bundle_id, "user_id": user_id})
        if user_id == self._client.session.user_id:
            await self.sync.refresh_quietly()

    async def _sync_if_holding(self, bundle_id: str) -> None:
        user_id = self._client.session.user_id
        if user_id is None:
            return
        try:
            bundles = await self.list_user_bundles(user_id)
        except ApiError as exc:
            logger.warning("Could not read own bundles; skipping permission sync", extra={"error": exc.message})
            return
        if any(b.id == bundle_id for b in bundles):
            await self.sync.refresh_quietly()

    async def _list(self, path: str) -> list[Any]:
        data = await self._client.get(f"{BASE_PATH}{path}")
        return list(data or [])
