"""Administrator console endpoints."""

from typing import Any

from restobook.api.client import ApiClient, parse
from restobook.models import AdminStats, Page, Reservation, Restaurant, User


class AdminApi:
    """``/admin/`` endpoints."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def stats(self) -> AdminStats:
        return parse(AdminStats, await self.client.get("/admin/stats/"))

    # Users

    async def users(self, search: str | None = None, role: str | None = None) -> Page[User]:
        data = await self.client.get(
            "/admin/users/", params={"search": search or None, "role": role or None}
        )
        return parse(Page[User], data)

    async def user(self, user_id: int) -> User:
        return parse(User, await self.client.get(f"/admin/users/{user_id}/"))

    async def create_user(self, fields: dict[str, Any]) -> User:
        return parse(User, await self.client.post("/admin/users/", json=fields))

    async def update_user(self, user_id: int, changes: dict[str, Any]) -> User:
        data = await self.client.patch(f"/admin/users/{user_id}/", json=changes)
        return parse(User, data)

    async def delete_user(self, user_id: int) -> None:
        await self.client.delete(f"/admin/users/{user_id}/")

    # Restaurants

    async def restaurants(
        self, search: str | None = None, is_active: bool | None = None
    ) -> Page[Restaurant]:
        params: dict[str, Any] = {"search": search or None}
        if is_active is not None:
            params["is_active"] = "true" if is_active else "false"
        data = await self.client.get("/admin/restaurants/", params=params)
        return parse(Page[Restaurant], data)

    async def restaurant(self, restaurant_id: int) -> Restaurant:
        data = await self.client.get(f"/admin/restaurants/{restaurant_id}/")
        return parse(Restaurant, data)

    async def create_restaurant(self, owner_id: int, fields: dict[str, Any]) -> Restaurant:
        data = await self.client.post(
            "/admin/restaurants/", json={**fields, "owner_id": owner_id}
        )
        return parse(Restaurant, data)

    async def update_restaurant(self, restaurant_id: int, changes: dict[str, Any]) -> Restaurant:
        data = await self.client.patch(f"/admin/restaurants/{restaurant_id}/", json=changes)
        return parse(Restaurant, data)

    async def delete_restaurant(self, restaurant_id: int) -> None:
        await self.client.delete(f"/admin/restaurants/{restaurant_id}/")

    # Reservations

    async def reservations(
        self,
        date: str | None = None,
        status: str | None = None,
        restaurant: int | None = None,
    ) -> Page[Reservation]:
        data = await self.client.get(
            "/admin/reservations/",
            params={"date": date or None, "status": status or None, "restaurant": restaurant},
        )
        return parse(Page[Reservation], data)
