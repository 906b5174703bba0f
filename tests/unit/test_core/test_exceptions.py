"""Tests for core exceptions."""

import httpx

from terra_client.core import exceptions as exc


def _response(status_code: int, **kwargs) -> httpx.Response:
    request = httpx.Request("GET", "http://crm.test/api/v1/health/reminders/9")
    return httpx.Response(status_code, request=request, **kwargs)


def test_api_error_defaults_title() -> None:
    error = exc.ApiError(message="bad", status=400)
    assert error.title == "Bad Request"
    assert error.detail == "bad"
    assert error.extra == {}


def test_api_error_without_status_is_network_error() -> None:
    error = exc.TransportError("connection refused")
    assert error.status is None
    assert error.status_text is None
    assert error.title == "Network Error"


def test_from_response_prefers_structured_error() -> None:
    response = _response(
        404,
        json={"message": "outer", "error": {"code": "NOT_FOUND", "message": "Reminder not found"}},
    )

    error = exc.ApiError.from_response(response)

    assert error.message == "Reminder not found"
    assert error.code == "NOT_FOUND"
    assert error.status == 404
    assert error.status_text == "Not Found"
    assert error.extra["url"].endswith("/v1/health/reminders/9")


def test_from_response_falls_back_to_message() -> None:
    error = exc.ApiError.from_response(_response(409, json={"message": "Duplicate"}))
    assert error.message == "Duplicate"
    assert error.code is None


def test_from_response_falls_back_to_reason_phrase() -> None:
    error = exc.ApiError.from_response(_response(502, text="<html>gateway</html>"))
    assert error.message == "Bad Gateway"
    assert error.title == "Bad Gateway"


def test_forbidden_error_keeps_redirected_flag() -> None:
    error = exc.ForbiddenError.from_response(_response(403, json={}), redirected=True)
    assert isinstance(error, exc.ForbiddenError)
    assert error.redirected is True
    assert error.status == 403


def test_refresh_timeout_is_unauthenticated() -> None:
    error = exc.RefreshTimeoutError(2.5)
    assert isinstance(error, exc.UnauthenticatedError)
    assert error.code == "REFRESH_TIMEOUT"
    assert error.extra["timeout"] == 2.5
    assert "2.5s" in error.message


def test_to_dict_includes_code_and_extra() -> None:
    error = exc.ApiError(message="m", code="C", status=422, extra={"field": "title"})
    assert error.to_dict() == {
        "message": "m",
        "title": "Unprocessable Entity",
        "status": 422,
        "status_text": None,
        "code": "C",
        "extra": {"field": "title"},
    }


def test_reconciliation_error_message() -> None:
    error = exc.ReconciliationError("cust-1", plan=None, applied=[("delete", "r2")], failed_operation="create")
    assert "cust-1" in str(error)
    assert "create" in str(error)
    assert error.applied == [("delete", "r2")]
