"""Session state shared by the client and the resource APIs.

Tokens live in memory only, so they disappear with the process. Tenant id,
user profile and permissions can optionally be persisted to a JSON file so a
CLI or worker can resume a tenant scope between runs.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_ABSENT_TENANT_VALUES = frozenset({"", "null", "undefined", "none"})


@dataclass(frozen=True)
class Credentials:
    """Access/refresh token pair. Replaced as a whole, never mutated."""

    access_token: str | None = None
    refresh_token: str | None = None

    def __repr__(self) -> str:
        return (
            f"Credentials(access_token={'***' if self.access_token else None}, "
            f"refresh_token={'***' if self.refresh_token else None})"
        )


def normalize_tenant_id(value: Any) -> str | None:
    """Return a usable tenant id, or None for empty and placeholder values."""
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() in _ABSENT_TENANT_VALUES:
        return None
    return text


class SessionStore:
    """Credentials and tenant scope for one client instance."""

    def __init__(self, state_file: Path | str | None = None) -> None:
        self._credentials = Credentials()
        self._tenant_id: str | None = None
        self._user: dict[str, Any] | None = None
        self._state_file = Path(state_file) if state_file else None
        if self._state_file is not None:
            self._load()

    # ──────────────────────────────────────────────────────────────
    # Tokens
    # ──────────────────────────────────────────────────────────────

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def access_token(self) -> str | None:
        return self._credentials.access_token

    @property
    def refresh_token(self) -> str | None:
        return self._credentials.refresh_token

    @property
    def is_authenticated(self) -> bool:
        return self._credentials.access_token is not None

    def set_tokens(self, access_token: str, refresh_token: str | None) -> None:
        """Replace both tokens."""
        self._credentials = Credentials(access_token, refresh_token)

    def update_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        """Store a refreshed access token, keeping the refresh token unless rotated."""
        self._credentials = Credentials(
            access_token,
            refresh_token or self._credentials.refresh_token,
        )

    def clear_tokens(self) -> None:
        self._credentials = Credentials()

    # ──────────────────────────────────────────────────────────────
    # Tenant / user
    # ──────────────────────────────────────────────────────────────

    @property
    def tenant_id(self) -> str | None:
        return self._tenant_id

    def set_tenant(self, tenant_id: Any) -> None:
        self._tenant_id = normalize_tenant_id(tenant_id)
        self._persist()

    @property
    def user(self) -> dict[str, Any] | None:
        return self._user

    @property
    def user_id(self) -> str | None:
        if not self._user:
            return None
        user_id = self._user.get("id") or self._user.get("userId")
        return str(user_id) if user_id is not None else None

    def set_user(self, user: dict[str, Any] | None) -> None:
        """Store the user profile; its ``tenantId`` (if any) becomes the tenant scope."""
        self._user = dict(user) if user is not None else None
        if self._user is not None:
            tenant_id = normalize_tenant_id(self._user.get("tenantId"))
            if tenant_id:
                self._tenant_id = tenant_id
        self._persist()

    @property
    def permissions(self) -> list[str]:
        if not self._user:
            return []
        return list(self._user.get("permissions") or [])

    def set_permissions(self, permissions: list[str]) -> None:
        if self._user is None:
            self._user = {}
        self._user["permissions"] = list(permissions)
        self._persist()

    def clear(self) -> None:
        """Drop credentials, tenant id and user profile."""
        self._credentials = Credentials()
        self._tenant_id = None
        self._user = None
        self._persist()

    # ──────────────────────────────────────────────────────────────
    # Persistence
    # ──────────────────────────────────────────────────────────────

    def _load(self) -> None:
        assert self._state_file is not None
        if not self._state_file.exists():
            return
        try:
            state = json.loads(self._state_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(
                "Ignoring unreadable session file",
                extra={"path": str(self._state_file), "error": str(exc)},
            )
            return
        if not isinstance(state, dict):
            return
        self._tenant_id = normalize_tenant_id(state.get("tenantId"))
        user = state.get("user")
        self._user = user if isinstance(user, dict) else None

    def _persist(self) -> None:
        if self._state_file is None:
            return
        state = {"tenantId": self._tenant_id, "user": self._user}
        self._state_file.parent.mkdir(parents=True, exist_ok=True)
        self._state_file.write_text(json.dumps(state, indent=2), encoding="utf-8")
