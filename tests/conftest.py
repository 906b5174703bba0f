"""Pytest configuration and shared fixtures.

Organization:
    - Environment: keep local conf/ directories and env files out of tests
    - Settings Fixtures: ClientSettings tuned for fast tests
    - HTTP Fixtures: fake backend, navigation recorder, client factory
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Callable

import pytest

from terra_client.core.settings import ClientSettings, clear_all_caches
from terra_client.infra.http import AuthenticatedClient, SessionStore
from tests.utils import BASE_URL, FakeBackend, NavigationRecorder

# Never pick up a developer's conf/ directory
os.environ.setdefault("CLIENT_CONFIG_DIR", "/nonexistent/terra-client-conf")
os.environ.setdefault("LOGGING_CONFIG_DIR", "/nonexistent/terra-client-conf")


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _clear_settings_caches():
    """Reset cached settings around every test."""
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def client_settings() -> ClientSettings:
    """Client settings pointing at the fake backend with a short refresh timeout."""
    return ClientSettings(base_url=BASE_URL, refresh_timeout=1.0)


# ============================================================================
# HTTP Fixtures
# ============================================================================


@pytest.fixture
def backend() -> FakeBackend:
    """In-process fake of the CRM backend, routed by method and path."""
    return FakeBackend()


@pytest.fixture
def navigation() -> NavigationRecorder:
    """Records routes passed to the client's navigation callbacks."""
    return NavigationRecorder()


@pytest.fixture
def session() -> SessionStore:
    """Session holding an expired access token and a valid refresh token."""
    store = SessionStore()
    store.set_tokens("old-access", "refresh-1")
    store.set_tenant("tenant-1")
    return store


@pytest.fixture
async def make_client(
    client_settings: ClientSettings,
    backend: FakeBackend,
    navigation: NavigationRecorder,
) -> AsyncGenerator[Callable[..., AuthenticatedClient]]:
    """Factory building clients wired to the fake backend.

    Every client created through the factory is closed after the test.

    Example:
        async def test_something(make_client, session):
            client = make_client(session=session)
            await client.get("/v1/health/reminders")
    """
    created: list[AuthenticatedClient] = []

    def factory(**kwargs) -> AuthenticatedClient:
        kwargs.setdefault("settings", client_settings)
        kwargs.setdefault("session", SessionStore())
        kwargs.setdefault("on_unauthenticated", navigation.unauthenticated)
        kwargs.setdefault("on_forbidden", navigation.forbidden)
        client = AuthenticatedClient(transport=backend.transport, **kwargs)
        created.append(client)
        return client

    yield factory

    for client in created:
        await client.close()


@pytest.fixture
def client(make_client, session) -> AuthenticatedClient:
    """Client over the fake backend using the default ``session`` fixture."""
    return make_client(session=session)
