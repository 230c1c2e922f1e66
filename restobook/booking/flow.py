"""Booking form: availability, slot selection and reservation submission."""

import asyncio
import logging

from restobook.api.reservations import ReservationsApi
from restobook.auth import AuthStore
from restobook.booking.availability import AvailabilityController
from restobook.booking.pending import PendingSelection, PendingSelectionStore
from restobook.booking.selection import SelectionState, SlotSelection
from restobook.config import Config
from restobook.exceptions import ApiError, RestobookError, format_field_errors
from restobook.models import Reservation, ReservationCreate, Restaurant
from restobook.navigation import MY_RESERVATIONS_PATH, Navigator, login_path, place_path

logger = logging.getLogger(__name__)

DEFAULT_GUEST_COUNT = 2


class BookingFlow:
    """State of the booking form on a restaurant page.

    Changing the date or the party size clears the selected slot and reloads
    availability. Submission is refused while availability is loading, while
    another submission is in flight, and for anonymous users (who are sent to
    login with this restaurant page as the return target). The form ignores
    changes while a submission is in flight.
    """

    CHOOSE_DATE_AND_TIME = "Choose a date and time"
    SUBMIT_FAILED = "Failed to create the reservation"

    def __init__(
        self,
        restaurant: Restaurant,
        reservations: ReservationsApi,
        auth: AuthStore,
        navigator: Navigator,
        config: Config,
        pending: PendingSelectionStore | None = None,
    ) -> None:
        self.restaurant = restaurant
        self.reservations = reservations
        self.auth = auth
        self.navigator = navigator
        self.config = config
        self.pending = pending

        self.date = ""
        self.guest_count = DEFAULT_GUEST_COUNT
        self.notes = ""

        self.availability = AvailabilityController(reservations, restaurant.slug)
        self.selection = SlotSelection()

        self.is_submitting = False
        self.submit_error = ""
        self.success = False
        self.reservation: Reservation | None = None

    @property
    def error(self) -> str:
        """The inline message to show, submission errors first."""
        return self.submit_error or self.availability.error

    @property
    def state(self) -> SelectionState:
        return self.selection.state

    @property
    def can_submit(self) -> bool:
        return (
            not self.is_submitting
            and not self.availability.is_loading
            and self.selection.has_slot
        )

    async def set_date(self, date: str) -> None:
        if self.is_submitting or self.state is SelectionState.SUBMITTED:
            return
        self.date = date
        self.submit_error = ""
        self.selection.choose_date(date)
        await self._reload()

    async def set_guest_count(self, guest_count: int) -> None:
        if self.is_submitting or self.state is SelectionState.SUBMITTED:
            return
        self.guest_count = max(1, min(self.config.max_guest_count, guest_count))
        self.submit_error = ""
        self.selection.invalidate()
        await self._reload()

    def select_slot(self, place_id: int, time: str) -> bool:
        """Select ``time`` at ``place_id`` from the displayed availability."""
        if self.is_submitting or self.availability.is_loading:
            return False
        place = self.availability.find_place(place_id)
        if place is None:
            return False
        return self.selection.select(place, time)

    async def submit(self) -> Reservation | None:
        """Create the reservation for the current selection.

        Returns:
            The created reservation, or None if nothing was created
        """
        if self.is_submitting or self.state is SelectionState.SUBMITTED:
            return None
        if self.availability.is_loading:
            return None

        if not self.auth.is_authenticated:
            self._save_pending()
            self.navigator.push(login_path(place_path(self.restaurant.slug)))
            return None

        if not self.date or not self.selection.time:
            self.submit_error = self.CHOOSE_DATE_AND_TIME
            return None

        request = ReservationCreate(
            restaurant=self.restaurant.id,
            place=self.selection.place_id,
            date=self.date,
            time_from=self.selection.time,
            guest_count=self.guest_count,
            notes=self.notes or None,
        )

        self.is_submitting = True
        self.submit_error = ""
        try:
            reservation = await self.reservations.create(request)
        except ApiError as e:
            logger.info(f"Reservation rejected with {e.status_code}: {e.payload}")
            self.submit_error = format_field_errors(e.payload) or self.SUBMIT_FAILED
            return None
        except RestobookError as e:
            logger.warning(f"Reservation request failed: {e}")
            self.submit_error = self.SUBMIT_FAILED
            return None
        finally:
            self.is_submitting = False

        self.selection.mark_submitted()
        self.success = True
        self.reservation = reservation

        if self.config.success_redirect_delay:
            await asyncio.sleep(self.config.success_redirect_delay)
        self.navigator.push(MY_RESERVATIONS_PATH)
        return reservation

    async def resume(self) -> bool:
        """Restore a selection saved before a login redirect.

        The saved slot is re-checked against fresh availability; if it is no
        longer offered only the date and party size are restored.

        Returns:
            True if the saved slot was selected again
        """
        if self.pending is None:
            return False
        saved = self.pending.load(self.restaurant.slug)
        if saved is None:
            return False
        self.pending.delete(self.restaurant.slug)

        self.notes = saved.notes
        self.guest_count = saved.guest_count
        await self.set_date(saved.date)

        if saved.place_id is None or saved.time is None:
            return False
        restored = self.select_slot(saved.place_id, saved.time)
        logger.info(
            f"Resumed booking for {self.restaurant.slug} on {saved.date}"
            f" (slot {'restored' if restored else 'no longer available'})"
        )
        return restored

    async def _reload(self) -> None:
        applied = await self.availability.load(self.date, self.guest_count)
        if applied:
            self.selection.revalidate(self.availability.places)

    def _save_pending(self) -> None:
        if self.pending is None or not self.date:
            return
        self.pending.save(
            PendingSelection(
                slug=self.restaurant.slug,
                date=self.date,
                guest_count=self.guest_count,
                place_id=self.selection.place_id,
                time=self.selection.time,
                notes=self.notes,
            )
        )
