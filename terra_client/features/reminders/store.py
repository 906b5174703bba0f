"""In-memory reminder cache backed by the reminder API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from terra_client.features.reminders.client import ReminderAPI
    from terra_client.features.reminders.schemas import Reminder

logger = logging.getLogger(__name__)


class ReminderStore:
    """Flat collection of reminders keyed by id.

    Reminders reference their relation through ``relation_id``; the store
    never nests them under the relation.
    """

    def __init__(self, api: ReminderAPI) -> None:
        self._api = api
        self._reminders: dict[str, Reminder] = {}

    @property
    def reminders(self) -> list[Reminder]:
        return list(self._reminders.values())

    def get(self, reminder_id: str) -> Reminder | None:
        return self._reminders.get(reminder_id)

    def by_relation(self, relation_id: str) -> list[Reminder]:
        return [r for r in self._reminders.values() if r.relation_id == relation_id]

    async def fetch_all(self) -> list[Reminder]:
        reminders = await self._api.list_all()
        self._reminders = {r.id: r for r in reminders if r.id is not None}
        logger.debug(f"Loaded {len(self._reminders)} reminders")
        return reminders

    async def fetch_by_relation(self, relation_id: str) -> list[Reminder]:
        """Replace the cached reminders of one relation with the server's."""
        reminders = await self._api.list_by_customer(relation_id)
        kept = {rid: r for rid, r in self._reminders.items() if r.relation_id != relation_id}
        kept.update((r.id, r) for r in reminders if r.id is not None)
        self._reminders = kept
        return reminders

    async def add(self, reminder: Reminder) -> Reminder:
        created = await self._api.create(reminder)
        if created.id is not None:
            self._reminders = {created.id: created, **self._reminders}
        return created

    async def update(self, reminder_id: str, reminder: Reminder) -> Reminder:
        updated = await self._api.update(reminder_id, reminder)
        self._reminders[reminder_id] = updated
        return updated

    async def delete(self, reminder_id: str) -> None:
        await self._api.delete(reminder_id)
        self._reminders.pop(reminder_id, None)

    async def toggle_complete(self, reminder_id: str) -> Reminder:
        updated = await self._api.toggle_complete(reminder_id)
        self._reminders[reminder_id] = updated
        return updated
