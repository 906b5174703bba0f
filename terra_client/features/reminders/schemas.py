"""Pydantic schemas for reminders and their settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from terra_client.core.schemas import CamelModel

TEMP_ID_PREFIX = "temp-"


class Reminder(CamelModel):
    """A reminder attached to a relation (usually a customer).

    The backend calls the schedule fields ``reminderDate`` / ``reminderTime``;
    here they are ``date`` / ``time``. Both spellings validate.
    """

    id: str | None = None
    relation_id: str | None = None
    relation_type: str | None = None
    title: str = ""
    note: str | None = None
    date: str | None = Field(default=None, alias="reminderDate")
    time: str | None = Field(default=None, alias="reminderTime")
    status_id: str | None = None
    is_completed: bool = False
    category_id: str | None = None
    sub_category_id: str | None = Field(default=None, alias="subcategoryId")

    @property
    def is_persisted(self) -> bool:
        """True when the reminder carries a server-assigned id."""
        return is_persisted_id(self.id)

    def to_payload(self) -> dict[str, Any]:
        """Request body for create/update.

        The id travels in the URL, never the body. Empty fields are sent as
        null so an update can clear them.
        """
        return self.to_wire(exclude={"id"}, exclude_none=False)


class ReminderCategory(CamelModel):
    id: str | None = None
    name: str
    color: str | None = None


class ReminderSubcategory(CamelModel):
    id: str | None = None
    name: str
    category_id: str | None = None


class ReminderStatus(CamelModel):
    id: str | None = None
    name: str
    color: str | None = None


def is_persisted_id(reminder_id: str | None) -> bool:
    return bool(reminder_id) and not str(reminder_id).startswith(TEMP_ID_PREFIX)
