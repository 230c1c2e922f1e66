"""Public restaurant catalogue endpoints."""

from restobook.api.client import ApiClient, parse
from restobook.models import Feature, MenuCategory, Page, Place, Restaurant


class RestaurantsApi:
    """``/restaurants/`` endpoints."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def get_all(
        self,
        type: str | None = None,
        search: str | None = None,
        feature: int | None = None,
    ) -> Page[Restaurant]:
        data = await self.client.get(
            "/restaurants/",
            params={"type": type or None, "search": search or None, "feature": feature},
        )
        return parse(Page[Restaurant], data)

    async def get(self, slug: str) -> Restaurant:
        return parse(Restaurant, await self.client.get(f"/restaurants/{slug}/"))

    async def places(self, slug: str) -> list[Place]:
        data = await self.client.get(f"/restaurants/{slug}/places/")
        return parse(list[Place], data)

    async def features(self) -> list[Feature]:
        data = await self.client.get("/restaurants/features/")
        return parse(list[Feature], data)

    async def menu(self, slug: str) -> list[MenuCategory]:
        data = await self.client.get(f"/restaurants/{slug}/menu/")
        return parse(list[MenuCategory], data)
