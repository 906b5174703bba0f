"""Fixtures for reminder tests: an in-memory reminder server."""

from __future__ import annotations

import itertools

import httpx
import pytest

from terra_client.features.reminders import ReminderAPI, ReminderStore
from tests.utils import FakeBackend, body_of, envelope, error

BASE = "/v1/health/reminders"


class ReminderServer:
    """Minimal stateful stand-in for the reminder endpoints.

    Stores reminders in wire shape and records every mutation as
    ``(operation, id)`` in ``log``.
    """

    def __init__(self, backend: FakeBackend) -> None:
        self.backend = backend
        self.rows: dict[str, dict] = {}
        self.log: list[tuple[str, str]] = []
        self.fail_on: set[tuple[str, str | None]] = set()
        self._ids = itertools.count(100)
        backend.add("GET", BASE, lambda request: envelope(list(self.rows.values())))
        backend.add("POST", BASE, self._create)
        self._route_relations()

    def seed(self, *rows: dict) -> None:
        for row in rows:
            self.rows[row["id"]] = dict(row)
            self._route_item(row["id"])
        self._route_relations()

    def _route_item(self, reminder_id: str) -> None:
        path = f"{BASE}/{reminder_id}"
        self.backend.add("GET", path, lambda request: self._get(reminder_id))
        self.backend.add("PUT", path, lambda request: self._update(reminder_id, request))
        self.backend.add("DELETE", path, lambda request: self._delete(reminder_id))
        self.backend.add("PATCH", f"{path}/toggle-complete", lambda request: self._toggle(reminder_id))

    def _route_relations(self) -> None:
        relations = {row.get("relationId") for row in self.rows.values()} | {"cust-1"}
        for relation_id in relations:
            self.backend.add(
                "GET",
                f"{BASE}/customer/{relation_id}",
                lambda request, rid=relation_id: envelope(
                    [row for row in self.rows.values() if row.get("relationId") == rid]
                ),
            )

    def _get(self, reminder_id: str) -> httpx.Response:
        if reminder_id not in self.rows:
            return error(404, "NOT_FOUND", "Reminder not found")
        return envelope(self.rows[reminder_id])

    def _create(self, request: httpx.Request) -> httpx.Response:
        if ("create", None) in self.fail_on:
            return error(422, "VALIDATION_ERROR", "Title is required")
        row = dict(body_of(request))
        row["id"] = f"r{next(self._ids)}"
        self.rows[row["id"]] = row
        self.log.append(("create", row["id"]))
        self._route_item(row["id"])
        self._route_relations()
        return envelope(row, status_code=201)

    def _update(self, reminder_id: str, request: httpx.Request) -> httpx.Response:
        if ("update", reminder_id) in self.fail_on:
            return error(500, "INTERNAL_ERROR", "Update failed")
        if reminder_id not in self.rows:
            return error(404, "NOT_FOUND", "Reminder not found")
        row = {**self.rows[reminder_id], **body_of(request), "id": reminder_id}
        self.rows[reminder_id] = row
        self.log.append(("update", reminder_id))
        return envelope(row)

    def _delete(self, reminder_id: str) -> httpx.Response:
        if reminder_id not in self.rows:
            return error(404, "NOT_FOUND", "Reminder not found")
        del self.rows[reminder_id]
        self.log.append(("delete", reminder_id))
        return httpx.Response(204)

    def _toggle(self, reminder_id: str) -> httpx.Response:
        row = self.rows[reminder_id]
        row["isCompleted"] = not row.get("isCompleted", False)
        return envelope(row)


@pytest.fixture
def reminder_server(backend) -> ReminderServer:
    return ReminderServer(backend)


@pytest.fixture
def reminder_api(client) -> ReminderAPI:
    return ReminderAPI(client)


@pytest.fixture
def reminder_store(reminder_api) -> ReminderStore:
    return ReminderStore(reminder_api)
