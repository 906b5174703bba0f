"""Authenticated HTTP client for the CRM REST API.

Provides:
- Bearer token and X-Tenant-ID header injection
- Envelope decoding into typed results
- Error normalization into ``ApiError``
- Transparent single refresh + retry on expired credentials
- Navigation callbacks for unauthenticated and forbidden outcomes
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import ValidationError

from terra_client.core.exceptions import (
    ApiError,
    ForbiddenError,
    TransportError,
    UnauthenticatedError,
)
from terra_client.core.settings import ClientSettings, get_client_settings
from terra_client.infra.http.envelope import Failure, Success, decode_envelope, unwrap
from terra_client.infra.http.refresh import RefreshListener, TokenPair, TokenRefresher
from terra_client.infra.http.session import SessionStore

logger = logging.getLogger(__name__)

NavigationCallback = Callable[[str], Awaitable[None] | None]

MODIFYING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


@dataclass
class RequestCall:
    """One outbound call, kept across its (at most one) retry."""

    method: str
    url: str
    json: Any = None
    params: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=dict)
    retried: bool = False
    sent_token: str | None = None

    @property
    def is_modifying(self) -> bool:
        return self.method in MODIFYING_METHODS


class AuthenticatedClient:
    """HTTP client that owns a session and keeps it authenticated.

    Example:
        ```python
        async with AuthenticatedClient(on_unauthenticated=router.push) as api:
            api.session.set_tokens(access, refresh)
            api.session.set_tenant("tenant-1")
            reminders = await api.get("/v1/health/reminders")
        ```
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        session: SessionStore | None = None,
        *,
        on_unauthenticated: NavigationCallback | None = None,
        on_forbidden: NavigationCallback | None = None,
        current_path: Callable[[], str | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Client settings. Loaded via get_client_settings() if omitted.
            session: Session store. A fresh one (backed by ``settings.session_file``)
                is created if omitted.
            on_unauthenticated: Called with the login route after the session is torn down.
            on_forbidden: Called with the forbidden route when a read is denied.
            current_path: Returns the host application's current route, used to
                avoid navigating to the forbidden page when already there.
            transport: Optional httpx transport (tests use ``httpx.MockTransport``).
            headers: Default headers added to every request.
        """
        self.settings = settings or get_client_settings()
        self.session = session or SessionStore(self.settings.session_file)
        self._on_unauthenticated = on_unauthenticated
        self._on_forbidden = on_forbidden
        self._current_path = current_path

        self.client = httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=httpx.Timeout(self.settings.timeout),
            headers={"Content-Type": "application/json", **(headers or {})},
            verify=self.settings.verify_ssl,
            transport=transport,
            limits=httpx.Limits(
                max_keepalive_connections=20,
                max_connections=100,
            ),
        )
        self.refresher = TokenRefresher(
            self.session,
            self._call_refresh_endpoint,
            on_failure=self._teardown,
            timeout=self.settings.refresh_timeout,
        )

    async def close(self) -> None:
        """Cancel pending refresh listeners, then close the HTTP client."""
        await self.refresher.cancel_listeners()
        await self.client.aclose()

    async def __aenter__(self) -> AuthenticatedClient:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager and close client."""
        await self.close()

    def add_refresh_listener(self, listener: RefreshListener) -> None:
        self.refresher.add_listener(listener)

    # ──────────────────────────────────────────────────────────────
    # Public request API
    # ──────────────────────────────────────────────────────────────

    async def send(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Success | Failure:
        """Issue a request and return the decoded envelope.

        Raises:
            TransportError: No response was received.
            UnauthenticatedError: Credentials are unusable; the session was cleared.
            ForbiddenError: Access denied after a refresh + retry.
            ApiError: Any other non-2xx response.
        """
        call = RequestCall(
            method=method.upper(),
            url=url,
            json=json,
            params=_drop_none(params),
            headers=dict(headers or {}),
        )
        return await self._dispatch(call)

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Issue a request and return the unwrapped payload.

        Returns ``data`` for a success envelope, the raw envelope when it
        reports ``success: false``, other JSON bodies unchanged and None for
        an empty body.
        """
        result = await self.send(method, url, json=json, params=params, headers=headers)
        return unwrap(result)

    async def get(self, url: str, *, params: dict[str, Any] | None = None, **kwargs: Any) -> Any:
        return await self.request("GET", url, params=params, **kwargs)

    async def post(self, url: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", url, json=json, **kwargs)

    async def put(self, url: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", url, json=json, **kwargs)

    async def patch(self, url: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("PATCH", url, json=json, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", url, **kwargs)

    # ──────────────────────────────────────────────────────────────
    # Dispatch
    # ──────────────────────────────────────────────────────────────

    async def _dispatch(self, call: RequestCall) -> Success | Failure:
        call.sent_token = self.session.access_token
        response = await self._send_raw(call)

        if response.is_success:
            return decode_envelope(_parse_body(response))
        return await self._handle_error(call, response)

    async def _send_raw(self, call: RequestCall) -> httpx.Response:
        logger.debug(
            f"{call.method} request to {call.url}",
            extra={"method": call.method, "path": call.url, "retried": call.retried},
        )
        try:
            response = await self.client.request(
                call.method,
                call.url,
                json=call.json,
                params=call.params,
                headers=self._build_headers(call),
            )
        except httpx.RequestError as exc:
            logger.warning(
                f"{call.method} {call.url} failed without a response",
                extra={"method": call.method, "path": call.url, "error": str(exc)},
            )
            raise TransportError(
                str(exc) or exc.__class__.__name__,
                extra={"method": call.method, "url": call.url},
            ) from exc

        logger.debug(
            f"{call.method} response from {call.url}",
            extra={
                "method": call.method,
                "path": call.url,
                "status_code": response.status_code,
            },
        )
        return response

    def _build_headers(self, call: RequestCall) -> dict[str, str]:
        headers: dict[str, str] = {}
        if call.sent_token:
            headers["Authorization"] = f"Bearer {call.sent_token}"

        if not self.settings.is_tenant_independent(call.url):
            tenant_id = self.session.tenant_id
            if tenant_id:
                headers["X-Tenant-ID"] = tenant_id
            else:
                logger.debug("No tenant id in session; X-Tenant-ID not sent", extra={"path": call.url})

        headers.update(call.headers)
        return headers

    async def _handle_error(self, call: RequestCall, response: httpx.Response) -> Success | Failure:
        status = response.status_code

        if status == 401:
            if self.settings.is_credential_call(call.url) or call.retried:
                await self._teardown()
                raise UnauthenticatedError.from_response(response)
            return await self._recover(call)

        if status == 403:
            if not self.session.refresh_token:
                await self._teardown()
                raise UnauthenticatedError.from_response(response)
            if not call.retried:
                return await self._recover(call)
            raise await self._forbidden(call, response)

        logger.debug(
            f"{call.method} {call.url} returned {status}",
            extra={"method": call.method, "path": call.url, "status_code": status},
        )
        raise ApiError.from_response(response)

    async def _recover(self, call: RequestCall) -> Success | Failure:
        """Refresh (or reuse a token rotated meanwhile) and retry once."""
        current = self.session.access_token
        if not current or current == call.sent_token:
            await self.refresher.refresh()
        call.retried = True
        return await self._dispatch(call)

    async def _forbidden(self, call: RequestCall, response: httpx.Response) -> ForbiddenError:
        surface = call.is_modifying or self.settings.is_user_action(call.url)
        redirected = False
        if not surface and not self._on_forbidden_page():
            logger.info("Access denied; navigating to forbidden route", extra={"path": call.url})
            await _emit(self._on_forbidden, self.settings.forbidden_route)
            redirected = True
        return ForbiddenError.from_response(response, redirected=redirected)

    def _on_forbidden_page(self) -> bool:
        if self._current_path is None:
            return False
        return self._current_path() in self.settings.forbidden_aliases

    async def _teardown(self) -> None:
        """Clear the session and hand navigation to the host application."""
        logger.info("Session cleared; navigating to login route")
        self.session.clear()
        await _emit(self._on_unauthenticated, self.settings.login_route)

    async def _call_refresh_endpoint(self, refresh_token: str) -> TokenPair:
        """Exchange the refresh token directly, outside the retry path."""
        try:
            response = await self.client.post(
                self.settings.refresh_path,
                json={"refreshToken": refresh_token},
            )
        except httpx.RequestError as exc:
            raise TransportError(
                str(exc) or exc.__class__.__name__,
                extra={"method": "POST", "url": self.settings.refresh_path},
            ) from exc

        if not response.is_success:
            raise UnauthenticatedError.from_response(response)

        result = decode_envelope(_parse_body(response))
        if isinstance(result, Failure):
            raise UnauthenticatedError(
                message=result.message or "Token refresh rejected",
                code=result.code,
                status=response.status_code,
            )
        try:
            return TokenPair.model_validate(result.data)
        except ValidationError as exc:
            raise UnauthenticatedError(
                message="Token refresh returned no access token",
                code="REFRESH_RESPONSE_INVALID",
                status=response.status_code,
            ) from exc


async def _emit(callback: NavigationCallback | None, route: str) -> None:
    if callback is None:
        return
    result = callback(route)
    if inspect.isawaitable(result):
        await result


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _drop_none(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if params is None:
        return None
    return {key: value for key, value in params.items() if value is not None}
