"""Availability query controller for the booking form."""

import logging

from pydantic import BaseModel, ConfigDict

from restobook.api.reservations import ReservationsApi
from restobook.exceptions import RestobookError
from restobook.models import AvailabilityResponse, PlaceAvailability

logger = logging.getLogger(__name__)


class AvailabilityKey(BaseModel):
    """The (date, guest_count) pair a response belongs to."""

    model_config = ConfigDict(frozen=True)

    date: str
    guest_count: int

    @property
    def is_valid(self) -> bool:
        return bool(self.date) and self.guest_count >= 1


class AvailabilityController:
    """Keeps the displayed slots consistent with the current query.

    Every load supersedes the previous one. Each request carries a ticket
    (its logical key plus a sequence number); a response, or a failure, is
    only applied while its ticket is still the current one, so a slow early
    response can never overwrite a later query.
    """

    CLOSED_MESSAGE = "The restaurant is closed on this day"
    LOAD_FAILED = "Failed to load times"

    def __init__(self, api: ReservationsApi, slug: str) -> None:
        self.api = api
        self.slug = slug
        self.response: AvailabilityResponse | None = None
        self.places: tuple[PlaceAvailability, ...] = ()
        self.is_loading = False
        self.is_closed = False
        self.error = ""
        self._sequence = 0
        self._current: tuple[AvailabilityKey, int] | None = None

    @property
    def key(self) -> AvailabilityKey | None:
        """Logical key of the most recent query, if any."""
        return self._current[0] if self._current else None

    def find_place(self, place_id: int) -> PlaceAvailability | None:
        for place in self.places:
            if place.id == place_id:
                return place
        return None

    def reset(self) -> None:
        """Forget the displayed data and supersede any request in flight."""
        self._sequence += 1
        self._current = None
        self.response = None
        self.places = ()
        self.is_loading = False
        self.is_closed = False
        self.error = ""

    async def load(self, date: str, guest_count: int) -> bool:
        """Query availability for ``date`` and ``guest_count``.

        Invalid keys (empty date, party size below one) issue no request and
        clear the slots.

        Returns:
            True if this call's result (data or error) was applied
        """
        key = AvailabilityKey(date=date or "", guest_count=guest_count)
        if not key.is_valid:
            self.reset()
            return False

        self._sequence += 1
        ticket = (key, self._sequence)
        self._current = ticket
        self.is_loading = True
        self.error = ""

        try:
            response = await self.api.availability(self.slug, key.date, key.guest_count)
        except RestobookError as e:
            if ticket != self._current:
                logger.debug(f"Discarding failure of superseded query {key}")
                return False
            logger.warning(f"Failed to load availability for {self.slug} {key}: {e}")
            self.response = None
            self.places = ()
            self.is_closed = False
            self.error = self.LOAD_FAILED
            self.is_loading = False
            return True

        if ticket != self._current:
            logger.debug(f"Discarding stale availability for {key}")
            return False

        self.response = response
        self.is_loading = False
        if response.is_closed:
            self.is_closed = True
            self.places = ()
            self.error = self.CLOSED_MESSAGE
        else:
            self.is_closed = False
            self.places = response.places
        return True
