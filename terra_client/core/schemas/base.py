"""Base schema classes for API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model for payloads exchanged with the CRM backend.

    The backend speaks camelCase JSON; Python code uses snake_case attribute
    names. Both spellings are accepted on input, and ``to_wire()`` emits the
    camelCase form.

    Example:
        class TenantInfo(CamelModel):
            tenant_id: str

        TenantInfo.model_validate({"tenantId": "t-1"}).to_wire()
        # {"tenantId": "t-1"}
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        # Populate models by field name (not alias)
        populate_by_name=True,
        # Keep fields the client does not model yet
        extra="allow",
        str_strip_whitespace=True,
        # Backend ids arrive as numbers or UUID strings
        coerce_numbers_to_str=True,
    )

    def to_wire(self, *, exclude_none: bool = True, **kwargs: Any) -> dict[str, Any]:
        """Serialize with camelCase keys for a request body."""
        return self.model_dump(by_alias=True, exclude_none=exclude_none, mode="json", **kwargs)
