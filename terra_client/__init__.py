"""Async client for the Terra multi-tenant healthcare CRM API."""

from terra_client.core.exceptions import (
    ApiError,
    ForbiddenError,
    ReconciliationError,
    RefreshTimeoutError,
    TransportError,
    UnauthenticatedError,
)
from terra_client.core.settings import ClientSettings, get_client_settings
from terra_client.infra.http import AuthenticatedClient, Failure, SessionStore, Success

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AuthenticatedClient",
    "ClientSettings",
    "Failure",
    "ForbiddenError",
    "ReconciliationError",
    "RefreshTimeoutError",
    "SessionStore",
    "Success",
    "TransportError",
    "UnauthenticatedError",
    "__version__",
    "get_client_settings",
]
