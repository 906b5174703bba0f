"""Response envelope decoding.

The backend wraps most payloads as ``{"success": bool, "data": ...}``. The
body is decoded into a ``Success`` or ``Failure`` exactly once, when the
response arrives; nothing downstream looks at the raw keys again.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ErrorBody(BaseModel):
    """Structured ``error`` object of a failure envelope."""

    model_config = ConfigDict(extra="allow")

    code: str | None = None
    message: str | None = None


class Success(BaseModel):
    """Successful result.

    ``enveloped`` is False when the body carried no ``{success, data}``
    wrapper; ``data`` then holds the whole decoded body.
    """

    kind: Literal["success"] = "success"
    data: Any = None
    message: str | None = None
    enveloped: bool = True


class Failure(BaseModel):
    """A 2xx response whose envelope reports ``success: false``."""

    kind: Literal["failure"] = "failure"
    message: str | None = None
    error: ErrorBody | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @property
    def code(self) -> str | None:
        return self.error.code if self.error else None


ApiResult = Annotated[Success | Failure, Field(discriminator="kind")]


def is_envelope(payload: Any) -> bool:
    return isinstance(payload, dict) and "success" in payload and "data" in payload


def decode_envelope(payload: Any) -> Success | Failure:
    """Decode a parsed JSON body into a typed result."""
    if not is_envelope(payload):
        return Success(data=payload, enveloped=False)

    message = payload.get("message") if isinstance(payload.get("message"), str) else None
    if payload["success"] is True:
        return Success(data=payload["data"], message=message)

    error = payload.get("error")
    return Failure(
        message=message or (error.get("message") if isinstance(error, dict) else None),
        error=ErrorBody.model_validate(error) if isinstance(error, dict) else None,
        raw=payload,
    )


def unwrap(result: Success | Failure) -> Any:
    """Return ``data`` for a success and the raw envelope for a failure."""
    if isinstance(result, Success):
        return result.data
    return result.raw
