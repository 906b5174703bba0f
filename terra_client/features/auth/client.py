"""Sign-in, sign-out and tenant discovery."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from terra_client.core.exceptions import ApiError
from terra_client.features.auth.schemas import DiscoveryResult, LoginResult, UserProfile
from terra_client.infra.http.session import normalize_tenant_id
from terra_client.infra.logging import clear_log_context, set_log_context

if TYPE_CHECKING:
    from terra_client.infra.http import AuthenticatedClient

logger = logging.getLogger(__name__)


class AuthAPI:
    """Authentication flows writing into the client's session."""

    def __init__(self, client: AuthenticatedClient) -> None:
        self._client = client

    async def discover(self, email: str) -> DiscoveryResult:
        """Find the tenants ``email`` belongs to."""
        data = await self._client.post("/v1/auth/discover", json={"email": email})
        return DiscoveryResult.model_validate(data or {})

    async def login(self, email: str, password: str, tenant_id: str) -> LoginResult:
        """Sign in to one tenant and store the resulting session.

        Raises:
            ValueError: No tenant id was given.
            ApiError: The backend rejected the credentials.
        """
        tenant_id = normalize_tenant_id(tenant_id)
        if not tenant_id:
            raise ValueError("Tenant ID is required for login")

        data = await self._client.post(
            "/auth/login",
            json={"email": email, "password": password},
            headers={"X-Tenant-ID": tenant_id},
        )
        result = LoginResult.model_validate(data)

        session = self._client.session
        session.set_tokens(result.token, result.refresh_token)
        session.set_tenant(result.user.tenant_id or tenant_id)
        session.set_user(result.user.to_wire(exclude_none=False))
        set_log_context(tenant_id=session.tenant_id, user_id=result.user.id)

        logger.info("Signed in", extra={"user_id": result.user.id, "tenant_id": session.tenant_id})
        return result

    async def logout(self) -> None:
        """Revoke the refresh token server-side and clear the session.

        The local session is cleared even when the backend call fails.
        """
        session = self._client.session
        try:
            await self._client.post("/v1/auth/logout", json={"refreshToken": session.refresh_token})
        except ApiError as exc:
            logger.warning("Logout request failed; clearing session anyway", extra={"error": exc.message})
        finally:
            session.clear()
            clear_log_context()
            logger.info("Signed out")

    def refresh_user(self, user: UserProfile) -> None:
        """Replace the stored profile, moving the tenant scope if it changed."""
        self._client.session.set_user(user.to_wire(exclude_none=False))
