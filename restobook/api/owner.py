"""Owner console endpoints (restaurant, places, menu, hours, images, inbox)."""

import logging
from typing import Any

from restobook.api.client import ApiClient, parse
from restobook.models import (
    MenuCategory,
    MenuItem,
    OwnerStats,
    Page,
    Place,
    Reservation,
    ReservationStatus,
    Restaurant,
    RestaurantImage,
    WorkingHours,
)

logger = logging.getLogger(__name__)

OWNER_ROOT = "/restaurants/owner"


class OwnerApi:
    """Endpoints available to restaurant owners.

    These are thin form-to-endpoint wrappers; partial updates take a plain
    dict of changed fields.
    """

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    # Restaurant

    async def my_restaurant(self) -> Restaurant:
        return parse(Restaurant, await self.client.get(f"{OWNER_ROOT}/"))

    async def update_restaurant(self, changes: dict[str, Any]) -> Restaurant:
        data = await self.client.patch(f"{OWNER_ROOT}/", json=changes)
        return parse(Restaurant, data)

    # Places

    async def places(self) -> list[Place]:
        data = await self.client.get(f"{OWNER_ROOT}/places/")
        return parse(list[Place], data)

    async def create_place(self, fields: dict[str, Any]) -> Place:
        return parse(Place, await self.client.post(f"{OWNER_ROOT}/places/", json=fields))

    async def update_place(self, place_id: int, changes: dict[str, Any]) -> Place:
        data = await self.client.patch(f"{OWNER_ROOT}/places/{place_id}/", json=changes)
        return parse(Place, data)

    async def delete_place(self, place_id: int) -> None:
        await self.client.delete(f"{OWNER_ROOT}/places/{place_id}/")

    # Reservations

    async def reservations(
        self, date: str | None = None, status: str | None = None
    ) -> Page[Reservation]:
        data = await self.client.get(
            "/reservations/owner/", params={"date": date or None, "status": status or None}
        )
        return parse(Page[Reservation], data)

    async def update_reservation(
        self, reservation_id: int, status: ReservationStatus
    ) -> Reservation:
        data = await self.client.patch(
            f"/reservations/owner/{reservation_id}/", json={"status": status.value}
        )
        logger.info(f"Reservation {reservation_id} set to {status.value}")
        return parse(Reservation, data)

    async def stats(self) -> OwnerStats:
        return parse(OwnerStats, await self.client.get("/reservations/owner/stats/"))

    # Images

    async def upload_image(self, filename: str, content: bytes) -> RestaurantImage:
        data = await self.client.post(
            f"{OWNER_ROOT}/images/", files={"image": (filename, content)}
        )
        return parse(RestaurantImage, data)

    async def delete_image(self, image_id: int) -> None:
        await self.client.delete(f"{OWNER_ROOT}/images/{image_id}/")

    async def set_main_image(self, image_id: int) -> None:
        await self.client.post(f"{OWNER_ROOT}/images/{image_id}/set_main/")

    # Working hours

    async def working_hours(self) -> list[WorkingHours]:
        data = await self.client.get(f"{OWNER_ROOT}/hours/")
        return parse(list[WorkingHours], data)

    async def update_working_hours(self, hours: list[WorkingHours]) -> list[WorkingHours]:
        data = await self.client.post(
            f"{OWNER_ROOT}/hours/bulk_update/",
            json=[day.model_dump(exclude={"day_name"}) for day in hours],
        )
        return parse(list[WorkingHours], data)

    # Menu

    async def menu_categories(self) -> list[MenuCategory]:
        data = await self.client.get(f"{OWNER_ROOT}/menu-categories/")
        return parse(list[MenuCategory], data)

    async def create_menu_category(self, fields: dict[str, Any]) -> MenuCategory:
        data = await self.client.post(f"{OWNER_ROOT}/menu-categories/", json=fields)
        return parse(MenuCategory, data)

    async def update_menu_category(
        self, category_id: int, changes: dict[str, Any]
    ) -> MenuCategory:
        data = await self.client.patch(
            f"{OWNER_ROOT}/menu-categories/{category_id}/", json=changes
        )
        return parse(MenuCategory, data)

    async def delete_menu_category(self, category_id: int) -> None:
        await self.client.delete(f"{OWNER_ROOT}/menu-categories/{category_id}/")

    async def menu_items(self, category_id: int | None = None) -> list[MenuItem]:
        data = await self.client.get(
            f"{OWNER_ROOT}/menu-items/", params={"category": category_id}
        )
        return parse(list[MenuItem], data)

    async def create_menu_item(self, category_id: int, fields: dict[str, Any]) -> MenuItem:
        data = await self.client.post(
            f"{OWNER_ROOT}/menu-items/", json={**fields, "category": category_id}
        )
        return parse(MenuItem, data)

    async def update_menu_item(self, item_id: int, changes: dict[str, Any]) -> MenuItem:
        data = await self.client.patch(f"{OWNER_ROOT}/menu-items/{item_id}/", json=changes)
        return parse(MenuItem, data)

    async def upload_menu_item_image(
        self, item_id: int, filename: str, content: bytes
    ) -> MenuItem:
        data = await self.client.patch(
            f"{OWNER_ROOT}/menu-items/{item_id}/", files={"image": (filename, content)}
        )
        return parse(MenuItem, data)

    async def delete_menu_item(self, item_id: int) -> None:
        await self.client.delete(f"{OWNER_ROOT}/menu-items/{item_id}/")
