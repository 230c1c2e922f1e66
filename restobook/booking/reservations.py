"""Reservation lists: the booker's own list and the owner inbox."""

import inspect
import logging
from collections.abc import Awaitable, Callable

from restobook.api.owner import OwnerApi
from restobook.api.reservations import ReservationsApi
from restobook.exceptions import RestobookError
from restobook.models import OWNER_TRANSITIONS, Reservation, ReservationStatus

logger = logging.getLogger(__name__)

Confirm = Callable[[Reservation], bool | Awaitable[bool]]


class MyReservations:
    """The signed-in user's reservations with cancellation."""

    LOAD_FAILED = "Failed to load reservations"
    CANCEL_FAILED = "Failed to cancel the reservation"

    def __init__(self, api: ReservationsApi) -> None:
        self.api = api
        self.reservations: list[Reservation] = []
        self.is_loading = False
        self.error = ""
        self._cancelling: set[int] = set()

    async def load(self) -> None:
        self.is_loading = True
        try:
            page = await self.api.mine()
            self.reservations = page.results
            self.error = ""
        except RestobookError as e:
            logger.warning(f"Failed to load reservations: {e}")
            self.error = self.LOAD_FAILED
        finally:
            self.is_loading = False

    def get(self, reservation_id: int) -> Reservation | None:
        for reservation in self.reservations:
            if reservation.id == reservation_id:
                return reservation
        return None

    @staticmethod
    def can_cancel(reservation: Reservation) -> bool:
        """Cancellation is only offered for pending and confirmed reservations."""
        return reservation.status.is_cancellable

    def is_cancelling(self, reservation_id: int) -> bool:
        return reservation_id in self._cancelling

    async def cancel(self, reservation_id: int, confirm: Confirm) -> bool:
        """Cancel a reservation after the user confirms.

        Args:
            reservation_id: Reservation to cancel
            confirm: Asked with the reservation; cancellation proceeds only on True

        Returns:
            True if the server accepted the cancellation
        """
        reservation = self.get(reservation_id)
        if reservation is None or not self.can_cancel(reservation):
            return False
        if reservation_id in self._cancelling:
            return False

        answer = confirm(reservation)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            return False

        self._cancelling.add(reservation_id)
        self.error = ""
        try:
            await self.api.cancel(reservation_id)
        except RestobookError as e:
            logger.warning(f"Failed to cancel reservation {reservation_id}: {e}")
            self.error = self.CANCEL_FAILED
            return False
        finally:
            self._cancelling.discard(reservation_id)

        self._replace(reservation.model_copy(update={"status": ReservationStatus.CANCELED}))
        await self.load()
        return True

    def _replace(self, updated: Reservation) -> None:
        self.reservations = [
            updated if item.id == updated.id else item for item in self.reservations
        ]


class OwnerInbox:
    """Reservations of the owner's restaurant, filtered by date and status."""

    LOAD_FAILED = "Failed to load reservations"
    UPDATE_FAILED = "Failed to update the reservation"

    def __init__(self, api: OwnerApi) -> None:
        self.api = api
        self.date_filter = ""
        self.status_filter: ReservationStatus | None = None
        self.reservations: list[Reservation] = []
        self.error = ""
        self._updating: set[int] = set()

    @staticmethod
    def actions(reservation: Reservation) -> tuple[ReservationStatus, ...]:
        """Status changes offered for ``reservation``."""
        return OWNER_TRANSITIONS.get(reservation.status, ())

    def is_updating(self, reservation_id: int) -> bool:
        return reservation_id in self._updating

    async def load(self) -> None:
        try:
            page = await self.api.reservations(
                date=self.date_filter or None,
                status=self.status_filter.value if self.status_filter else None,
            )
            self.reservations = page.results
            self.error = ""
        except RestobookError as e:
            logger.warning(f"Failed to load owner reservations: {e}")
            self.error = self.LOAD_FAILED

    async def change_status(self, reservation_id: int, status: ReservationStatus) -> bool:
        reservation = next((r for r in self.reservations if r.id == reservation_id), None)
        if reservation is None or status not in self.actions(reservation):
            return False
        if reservation_id in self._updating:
            return False

        self._updating.add(reservation_id)
        try:
            updated = await self.api.update_reservation(reservation_id, status)
        except RestobookError as e:
            logger.warning(f"Failed to set reservation {reservation_id} to {status.value}: {e}")
            self.error = self.UPDATE_FAILED
            return False
        finally:
            self._updating.discard(reservation_id)

        self.error = ""
        self.reservations = [
            updated if item.id == reservation_id else item for item in self.reservations
        ]
        return True
