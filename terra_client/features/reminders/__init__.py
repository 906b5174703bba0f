"""Reminders: API clients, local store and list reconciliation."""

from terra_client.features.reminders.client import ReminderAPI
from terra_client.features.reminders.reconciler import (
    ReconciliationPlan,
    ReminderReconciler,
    is_temporary_id,
    plan_reconciliation,
)
from terra_client.features.reminders.schemas import (
    TEMP_ID_PREFIX,
    Reminder,
    ReminderCategory,
    ReminderStatus,
    ReminderSubcategory,
)
from terra_client.features.reminders.settings_client import ReminderSettingsAPI
from terra_client.features.reminders.store import ReminderStore

__all__ = [
    "TEMP_ID_PREFIX",
    "ReconciliationPlan",
    "Reminder",
    "ReminderAPI",
    "ReminderCategory",
    "ReminderReconciler",
    "ReminderSettingsAPI",
    "ReminderStatus",
    "ReminderStore",
    "ReminderSubcategory",
    "is_temporary_id",
    "plan_reconciliation",
]
