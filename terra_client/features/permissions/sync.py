"""Keep the session's permission list in step with the backend.

MODULE_* permissions come with the login response and are kept as they are;
fine-grained permissions are re-read from the tenant-admin API and merged in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from terra_client.core.exceptions import ApiError
from terra_client.features.permissions.schemas import MODULE_PREFIX

if TYPE_CHECKING:
    from terra_client.features.permissions.client import PermissionAPI
    from terra_client.infra.http import AuthenticatedClient

logger = logging.getLogger(__name__)


def merge_permissions(current: Iterable[str], granular: Iterable[str]) -> list[str]:
    """Keep MODULE_* entries of ``current`` and append ``granular``, without duplicates."""
    merged: list[str] = []
    seen: set[str] = set()
    for name in [p for p in current if p and p.startswith(MODULE_PREFIX)] + list(granular):
        if name and name not in seen:
            seen.add(name)
            merged.append(name)
    return merged


class PermissionSync:
    """Re-derives the signed-in user's permissions."""

    def __init__(self, client: AuthenticatedClient, api: PermissionAPI) -> None:
        self._client = client
        self._api = api

    def attach(self) -> PermissionSync:
        """Run ``refresh_quietly`` after every successful token refresh."""
        self._client.add_refresh_listener(self.refresh_quietly)
        return self

    async def refresh(self) -> list[str] | None:
        """Merge freshly fetched granular permissions into the session.

        Returns the merged list, or None when no user is signed in.
        """
        session = self._client.session
        user_id = session.user_id
        if user_id is None:
            return None

        granular = await self._api.list_user_permissions(user_id)
        merged = merge_permissions(session.permissions, granular)
        session.set_permissions(merged)
        logger.debug(
            "Permissions synchronized",
            extra={"user_id": user_id, "permission_count": len(merged)},
        )
        return merged

    async def refresh_quietly(self) -> list[str] | None:
        """Best-effort ``refresh``: API failures are logged and ignored."""
        try:
            return await self.refresh()
        except ApiError as exc:
            logger.warning(
                "Permission sync failed",
                extra={"status": exc.status, "code": exc.code, "error": exc.message},
            )
            return None
