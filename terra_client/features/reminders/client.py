"""Reminder endpoints of the CRM API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from terra_client.features.reminders.schemas import Reminder

if TYPE_CHECKING:
    from terra_client.infra.http import AuthenticatedClient

logger = logging.getLogger(__name__)

BASE_PATH = "/v1/health/reminders"


class ReminderAPI:
    """Typed access to ``/v1/health/reminders``.

    Responses are mapped from the wire shape (``reminderDate``,
    ``reminderTime``) onto ``Reminder`` models.
    """

    def __init__(self, client: AuthenticatedClient) -> None:
        self._client = client

    async def list_all(self) -> list[Reminder]:
        return _to_list(await self._client.get(BASE_PATH))

    async def get(self, reminder_id: str) -> Reminder:
        return Reminder.model_validate(await self._client.get(f"{BASE_PATH}/{reminder_id}"))

    async def list_by_customer(self, customer_id: str) -> list[Reminder]:
        return _to_list(await self._client.get(f"{BASE_PATH}/customer/{customer_id}"))

    async def list_by_date_range(self, start_date: str, end_date: str) -> list[Reminder]:
        data = await self._client.get(
            f"{BASE_PATH}/date-range",
            params={"startDate": start_date, "endDate": end_date},
        )
        return _to_list(data)

    async def create(self, reminder: Reminder) -> Reminder:
        data = await self._client.post(BASE_PATH, json=reminder.to_payload())
        created = Reminder.model_validate(data)
        logger.info(
            "Reminder created",
            extra={
                "reminder_id": created.id,
                "relation_id": reminder.relation_id,
                "operation": "reminders.create",
            },
        )
        return created

    async def update(self, reminder_id: str, reminder: Reminder) -> Reminder:
        data = await self._client.put(f"{BASE_PATH}/{reminder_id}", json=reminder.to_payload())
        logger.debug("Reminder updated", extra={"reminder_id": reminder_id, "operation": "reminders.update"})
        return Reminder.model_validate(data)

    async def delete(self, reminder_id: str) -> None:
        await self._client.delete(f"{BASE_PATH}/{reminder_id}")
        logger.info("Reminder deleted", extra={"reminder_id": reminder_id, "operation": "reminders.delete"})

    async def toggle_complete(self, reminder_id: str) -> Reminder:
        data = await self._client.patch(f"{BASE_PATH}/{reminder_id}/toggle-complete")
        return Reminder.model_validate(data)


def _to_list(data: Any) -> list[Reminder]:
    return [Reminder.model_validate(item) for item in data or []]
