"""Exception classes raised by the CRM client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class ApiError(Exception):
    """Normalized API error.

    Every failure surfaced by the client is flattened into this shape so
    callers can read ``message`` and ``code`` without inspecting the raw
    response body.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error code from the response body, if any.
        status: HTTP status code, or None when no response was received.
        status_text: HTTP reason phrase, or None when no response was received.
        title: Short, human-readable summary of the problem type.
        extra: Additional context about the error.

    Example:
        raise ApiError(
            message="Reminder not found",
            code="NOT_FOUND",
            status=404,
            status_text="Not Found",
        )
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status: int | None = None,
        status_text: str | None = None,
        title: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status = status
        self.status_text = status_text
        self.title = title or self._default_title(status)
        self.extra = extra or {}
        super().__init__(message)

    @property
    def detail(self) -> str:
        return self.message

    @staticmethod
    def _default_title(status: int | None) -> str:
        """Get default title for HTTP status code.

        Args:
            status: HTTP status code, or None for transport failures.

        Returns:
            Human-readable title for the status code.
        """
        if status is None:
            return "Network Error"
        titles = {
            400: "Bad Request",
            401: "Unauthorized",
            403: "Forbidden",
            404: "Not Found",
            409: "Conflict",
            422: "Unprocessable Entity",
            429: "Too Many Requests",
            500: "Internal Server Error",
            502: "Bad Gateway",
            503: "Service Unavailable",
            504: "Gateway Timeout",
        }
        return titles.get(status, "Error")

    @classmethod
    def from_response(cls, response: httpx.Response, **kwargs: Any) -> ApiError:
        """Build a normalized error from an HTTP error response.

        Prefers the structured ``{"error": {"code", "message"}}`` body, then a
        top-level ``message``, then the reason phrase.
        """
        code: str | None = None
        message: str | None = None

        body: Any = None
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                code = error.get("code")
                message = error.get("message") or body.get("message")
            elif isinstance(body.get("message"), str):
                message = body["message"]

        return cls(
            message=message or response.reason_phrase or "An error occurred",
            code=code,
            status=response.status_code,
            status_text=response.reason_phrase or None,
            extra={"url": str(response.request.url)} if response.request else None,
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a serializable view of the error for display or logging."""
        payload: dict[str, Any] = {
            "message": self.message,
            "title": self.title,
            "status": self.status,
            "status_text": self.status_text,
        }
        if self.code:
            payload["code"] = self.code
        if self.extra:
            payload["extra"] = self.extra
        return payload

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, "
            f"code={self.code!r}, status={self.status!r})"
        )


class TransportError(ApiError):
    """Raised when no response was received (connection, DNS, timeout)."""

    def __init__(self, message: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(message=message, extra=extra)


class UnauthenticatedError(ApiError):
    """Raised after the session was torn down because credentials are unusable.

    Example:
        raise UnauthenticatedError(
            message="Refresh token missing",
            status=401,
        )
    """

    def __init__(
        self,
        message: str = "Authentication required",
        code: str | None = None,
        status: int | None = 401,
        status_text: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status=status,
            status_text=status_text,
            title="Unauthorized",
            extra=extra,
        )


class ForbiddenError(ApiError):
    """Raised when an authenticated caller is denied access.

    ``redirected`` tells whether the forbidden navigation callback fired for
    this error, so the caller does not render an inline message on top of it.
    """

    def __init__(
        self,
        message: str = "Access denied",
        code: str | None = None,
        status: int | None = 403,
        status_text: str | None = None,
        extra: dict[str, Any] | None = None,
        redirected: bool = False,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status=status,
            status_text=status_text,
            title="Forbidden",
            extra=extra,
        )
        self.redirected = redirected


class RefreshTimeoutError(UnauthenticatedError):
    """Raised when the token refresh call does not settle in time."""

    def __init__(self, timeout: float) -> None:
        super().__init__(
            message=f"Token refresh did not complete within {timeout:g}s",
            code="REFRESH_TIMEOUT",
            status=None,
            extra={"timeout": timeout},
        )
        self.timeout = timeout


class ReconciliationError(Exception):
    """Raised when reconciling reminders fails part-way.

    The server may now hold a partially applied state; callers should
    re-fetch the relation's reminders to inspect it. The original failure
    is chained as ``__cause__``.

    Attributes:
        relation_id: Relation whose reminders were being reconciled.
        plan: The full reconciliation plan.
        applied: Operations that completed before the failure, as
            ``(operation, reminder_id)`` tuples.
    """

    def __init__(
        self,
        relation_id: str,
        plan: Any,
        applied: list[tuple[str, str | None]],
        failed_operation: str,
    ) -> None:
        self.relation_id = relation_id
        self.plan = plan
        self.applied = applied
        self.failed_operation = failed_operation
        super().__init__(
            f"Reminder reconciliation for relation {relation_id} failed during "
            f"{failed_operation} after {len(applied)} applied operation(s)"
        )


__all__ = [
    "ApiError",
    "ForbiddenError",
    "ReconciliationError",
    "RefreshTimeoutError",
    "TransportError",
    "UnauthenticatedError",
]
