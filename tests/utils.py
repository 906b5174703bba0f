"""Test utilities: an in-process fake backend and small response helpers.

Usage:
    from tests.utils import FakeBackend, envelope

    backend = FakeBackend()
    backend.add("GET", "/v1/health/reminders", envelope([]))
    client = AuthenticatedClient(settings, transport=backend.transport)
"""

from __future__ import annotations

import inspect
import json
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

BASE_URL = "http://crm.test/api"
BASE_PATH = "/api"

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


# ============================================================================
# Response helpers
# ============================================================================


def envelope(data: Any = None, status_code: int = 200, message: str | None = None) -> httpx.Response:
    """Success envelope ``{"success": true, "data": ...}``."""
    body: dict[str, Any] = {"success": True, "data": data}
    if message is not None:
        body["message"] = message
    return httpx.Response(status_code, json=body)


def error(status_code: int, code: str | None = None, message: str | None = None) -> httpx.Response:
    """Error response in the backend's ``{"error": {code, message}}`` shape."""
    body: dict[str, Any] = {"success": False, "data": None}
    if code or message:
        body["error"] = {"code": code, "message": message}
    return httpx.Response(status_code, json=body)


def body_of(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None


# ============================================================================
# Fake backend
# ============================================================================


class FakeBackend:
    """Route table used as an ``httpx.MockTransport`` handler.

    Routes map ``(METHOD, path)`` to either a fixed response or a handler
    (sync or async) receiving the request. Paths are relative to the API
    base path. Every request is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler | httpx.Response] = {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    def add(self, method: str, path: str, response: Handler | httpx.Response) -> None:
        self.routes[(method.upper(), path)] = response

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and _path(r) == path]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, _path(request)))
        if route is None:
            return httpx.Response(404, json={"message": f"No route for {request.method} {_path(request)}"})
        if isinstance(route, httpx.Response):
            return httpx.Response(route.status_code, content=route.content, headers=route.headers)
        result = route(request)
        if inspect.isawaitable(result):
            result = await result
        return result


def _path(request: httpx.Request) -> str:
    path = request.url.path
    return path[len(BASE_PATH):] if path.startswith(BASE_PATH) else path


def bearer(request: httpx.Request) -> str | None:
    value = request.headers.get("Authorization")
    return value.removeprefix("Bearer ") if value else None


# ============================================================================
# Navigation
# ============================================================================


class NavigationRecorder:
    """Collects routes emitted through ``on_unauthenticated`` / ``on_forbidden``."""

    def __init__(self) -> None:
        self.login: list[str] = []
        self.forbidden_routes: list[str] = []

    def unauthenticated(self, route: str) -> None:
        self.login.append(route)

    async def forbidden(self, route: str) -> None:
        self.forbidden_routes.append(route)
