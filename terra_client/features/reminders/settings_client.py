"""Reminder categories, subcategories and statuses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from terra_client.core.schemas import CamelModel
from terra_client.features.reminders.schemas import (
    ReminderCategory,
    ReminderStatus,
    ReminderSubcategory,
)

if TYPE_CHECKING:
    from terra_client.infra.http import AuthenticatedClient

BASE_PATH = "/v1/health/reminder-settings"

ModelT = TypeVar("ModelT", bound=CamelModel)


class ReminderSettingsAPI:
    """CRUD for the lookup tables reminders refer to."""

    def __init__(self, client: AuthenticatedClient) -> None:
        self._client = client

    # Categories
    async def list_categories(self) -> list[ReminderCategory]:
        return await self._list("categories", ReminderCategory)

    async def create_category(self, category: ReminderCategory) -> ReminderCategory:
        return await self._create("categories", category)

    async def update_category(self, category_id: str, category: ReminderCategory) -> ReminderCategory:
        return await self._update("categories", category_id, category)

    async def delete_category(self, category_id: str) -> None:
        await self._client.delete(f"{BASE_PATH}/categories/{category_id}")

    # Subcategories
    async def list_subcategories(self) -> list[ReminderSubcategory]:
        return await self._list("subcategories", ReminderSubcategory)

    async def list_subcategories_by_category(self, category_id: str) -> list[ReminderSubcategory]:
        return await self._list(f"categories/{category_id}/subcategories", ReminderSubcategory)

    async def create_subcategory(self, subcategory: ReminderSubcategory) -> ReminderSubcategory:
        return await self._create("subcategories", subcategory)

    async def update_subcategory(
        self, subcategory_id: str, subcategory: ReminderSubcategory
    ) -> ReminderSubcategory:
        return await self._update("subcategories", subcategory_id, subcategory)

    async def delete_subcategory(self, subcategory_id: str) -> None:
        await self._client.delete(f"{BASE_PATH}/subcategories/{subcategory_id}")

    # Statuses
    async def list_statuses(self) -> list[ReminderStatus]:
        return await self._list("statuses", ReminderStatus)

    async def create_status(self, status: ReminderStatus) -> ReminderStatus:
        return await self._create("statuses", status)

    async def update_status(self, status_id: str, status: ReminderStatus) -> ReminderStatus:
        return await self._update("statuses", status_id, status)

    async def delete_status(self, status_id: str) -> None:
        await self._client.delete(f"{BASE_PATH}/statuses/{status_id}")

    async def _list(self, resource: str, model: type[ModelT]) -> list[ModelT]:
        data: Any = await self._client.get(f"{BASE_PATH}/{resource}")
        return [model.model_validate(item) for item in data or []]

    async def _create(self, resource: str, item: ModelT) -> ModelT:
        data = await self._client.post(f"{BASE_PATH}/{resource}", json=item.to_wire(exclude={"id"}))
        return type(item).model_validate(data)

    async def _update(self, resource: str, item_id: str, item: ModelT) -> ModelT:
        data = await self._client.put(
            f"{BASE_PATH}/{resource}/{item_id}",
            json=item.to_wire(exclude={"id"}),
        )
        return type(item).model_validate(data)
