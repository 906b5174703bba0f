"""Converge a relation's server-side reminders onto an edited list.

Planning is a pure set difference by id; execution issues the operations
through ``ReminderAPI`` and finishes by re-reading the relation's reminders
from the server, since the edited list may predate concurrent changes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from terra_client.core.exceptions import ReconciliationError
from terra_client.features.reminders.schemas import Reminder, is_persisted_id

if TYPE_CHECKING:
    from terra_client.features.reminders.client import ReminderAPI
    from terra_client.features.reminders.store import ReminderStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationPlan:
    """Operations that turn the current list into the desired one."""

    deletes: tuple[str, ...] = ()
    updates: tuple[Reminder, ...] = ()
    creates: tuple[Reminder, ...] = ()

    @property
    def operation_count(self) -> int:
        return len(self.deletes) + len(self.updates) + len(self.creates)

    @property
    def is_empty(self) -> bool:
        return self.operation_count == 0


def is_temporary_id(reminder_id: str | None) -> bool:
    """True for ids the server never issued (missing or ``temp-`` prefixed)."""
    return not is_persisted_id(reminder_id)


def plan_reconciliation(
    current: Iterable[Reminder],
    desired: Iterable[Reminder],
    *,
    relation_id: str | None = None,
    relation_type: str | None = None,
) -> ReconciliationPlan:
    """Diff ``current`` (server state) against ``desired`` by id.

    - ids in ``current`` missing from ``desired`` are deleted
    - desired items whose real id exists in ``current`` are updated, changed or not
    - every other desired item is created with its id dropped

    When ``relation_id`` / ``relation_type`` are given, they are stamped on
    updated and created items.
    """
    current_ids: list[str] = []
    for reminder in current:
        if reminder.id is not None and reminder.id not in current_ids:
            current_ids.append(reminder.id)
    known = set(current_ids)

    desired = list(desired)
    kept = {r.id for r in desired if is_persisted_id(r.id) and r.id in known}

    relation: dict[str, str] = {}
    if relation_id is not None:
        relation["relation_id"] = relation_id
    if relation_type is not None:
        relation["relation_type"] = relation_type

    updates: list[Reminder] = []
    creates: list[Reminder] = []
    for reminder in desired:
        if reminder.id in kept:
            updates.append(reminder.model_copy(update=relation))
        else:
            creates.append(reminder.model_copy(update={**relation, "id": None}))

    return ReconciliationPlan(
        deletes=tuple(rid for rid in current_ids if rid not in kept),
        updates=tuple(updates),
        creates=tuple(creates),
    )


class ReminderReconciler:
    """Applies reconciliation plans for one relation at a time.

    Operations run sequentially: deletes, then updates, then creates. The
    first failure stops the run and is raised as ``ReconciliationError``
    listing what was already applied; nothing is rolled back.
    """

    def __init__(self, api: ReminderAPI, store: ReminderStore | None = None) -> None:
        self._api = api
        self._store = store

    async def reconcile(
        self,
        relation_id: str,
        desired: Iterable[Reminder],
        *,
        relation_type: str | None = None,
        current: Iterable[Reminder] | None = None,
    ) -> list[Reminder]:
        """Make the server's reminders for ``relation_id`` match ``desired``.

        Args:
            relation_id: Relation (e.g. customer id) owning the reminders.
            desired: The edited list; items without a real id are new.
            relation_type: Relation type sent with updated and created items.
            current: Server-known reminders. Fetched when omitted.

        Returns:
            The relation's reminders as re-read from the server.

        Raises:
            ReconciliationError: An operation failed; the cause is chained.
        """
        if current is None:
            current = await self._api.list_by_customer(relation_id)

        plan = plan_reconciliation(
            current,
            desired,
            relation_id=relation_id,
            relation_type=relation_type,
        )
        logger.info(
            "Reconciling reminders",
            extra={
                "relation_id": relation_id,
                "deletes": len(plan.deletes),
                "updates": len(plan.updates),
                "creates": len(plan.creates),
                "operation": "reminders.reconcile",
            },
        )

        applied: list[tuple[str, str | None]] = []
        operation = "delete"
        try:
            for reminder_id in plan.deletes:
                await self._api.delete(reminder_id)
                applied.append(("delete", reminder_id))

            operation = "update"
            for reminder in plan.updates:
                assert reminder.id is not None
                await self._api.update(reminder.id, reminder)
                applied.append(("update", reminder.id))

            operation = "create"
            for reminder in plan.creates:
                created = await self._api.create(reminder)
                applied.append(("create", created.id))
        except Exception as exc:
            logger.warning(
                "Reminder reconciliation stopped",
                extra={
                    "relation_id": relation_id,
                    "failed_operation": operation,
                    "applied": len(applied),
                    "error": str(exc),
                },
            )
            raise ReconciliationError(relation_id, plan, applied, operation) from exc

        if self._store is not None:
            return await self._store.fetch_by_relation(relation_id)
        return await self._api.list_by_customer(relation_id)
