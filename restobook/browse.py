"""Map/list browse view of the restaurant catalogue."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from contextlib import suppress

from pydantic import BaseModel, ConfigDict

from restobook.api.restaurants import RestaurantsApi
from restobook.exceptions import RestobookError
from restobook.models import Restaurant
from restobook.navigation import Navigator, place_path

logger = logging.getLogger(__name__)

# Type filter values accepted by the catalogue endpoint ("" means all)
RESTAURANT_TYPES = ("", "restaurant", "cafe", "choyxona", "fastfood")


class MapPin(BaseModel):
    """A marker on the map for one restaurant."""

    model_config = ConfigDict(frozen=True)

    id: int
    slug: str
    name: str
    latitude: float
    longitude: float
    is_open: bool


class Debouncer:
    """Runs an action once input has been quiet for ``delay`` seconds.

    Each ``trigger`` cancels the pending run and schedules a new one, so a
    burst of triggers results in a single call.
    """

    def __init__(self, delay: float, action: Callable[[], Awaitable[None]]) -> None:
        self.delay = delay
        self.action = action
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self) -> None:
        self.cancel()
        self._task = asyncio.create_task(self._run())

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def flush(self) -> None:
        """Wait for the scheduled run, if any."""
        if self._task is not None:
            with suppress(asyncio.CancelledError):
                await self._task

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        await self.action()


class BrowseView:
    """Restaurant collection filtered by type and search text."""

    def __init__(
        self, api: RestaurantsApi, navigator: Navigator, debounce: float = 0.3
    ) -> None:
        self.api = api
        self.navigator = navigator
        self.restaurants: list[Restaurant] = []
        self.is_loading = False
        self.selected_type = ""
        self.search_text = ""
        self._search = Debouncer(debounce, self.load)

    async def load(self) -> None:
        """Fetch the catalogue with the current filters."""
        self.is_loading = True
        try:
            page = await self.api.get_all(
                type=self.selected_type or None, search=self.search_text or None
            )
            self.restaurants = page.results
        except RestobookError as e:
            logger.error(f"Failed to load restaurants: {e}")
            self.restaurants = []
        finally:
            self.is_loading = False

    async def set_type(self, restaurant_type: str) -> None:
        if restaurant_type not in RESTAURANT_TYPES:
            raise ValueError(f"Unknown restaurant type: {restaurant_type!r}")
        self.selected_type = restaurant_type
        self._search.cancel()
        await self.load()

    def set_search(self, text: str) -> None:
        """Update the search text; the fetch happens after the debounce window."""
        self.search_text = text.strip()
        self._search.trigger()

    async def settle(self) -> None:
        """Wait for a pending debounced search to finish."""
        await self._search.flush()

    def pins(self) -> list[MapPin]:
        """Markers for every restaurant with coordinates."""
        return [
            MapPin(
                id=restaurant.id,
                slug=restaurant.slug,
                name=restaurant.name,
                latitude=restaurant.latitude,
                longitude=restaurant.longitude,
                is_open=restaurant.is_open,
            )
            for restaurant in self.restaurants
            if restaurant.latitude is not None and restaurant.longitude is not None
        ]

    def open(self, restaurant: Restaurant) -> None:
        self.navigator.push(place_path(restaurant.slug))
