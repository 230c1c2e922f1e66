"""Single-slot selection state for the booking form."""

import logging
from collections.abc import Iterable
from enum import Enum

from restobook.models import PlaceAvailability

logger = logging.getLogger(__name__)


class SelectionState(str, Enum):
    """Where the user is in the booking form."""

    NO_DATE = "no_date"
    DATE_CHOSEN = "date_chosen"
    SLOT_CHOSEN = "slot_chosen"
    SUBMITTED = "submitted"


class SlotSelection:
    """Tracks the chosen (place, time) pair.

    At most one slot is selected at a time. Any change of date or party size
    invalidates the selection, and a selection is only ever made against an
    available slot of the currently displayed availability.
    """

    def __init__(self) -> None:
        self.state = SelectionState.NO_DATE
        self.place_id: int | None = None
        self.time: str | None = None

    @property
    def has_slot(self) -> bool:
        return self.state is SelectionState.SLOT_CHOSEN

    def is_selected(self, place_id: int, time: str) -> bool:
        return self.has_slot and self.place_id == place_id and self.time == time

    def choose_date(self, date: str) -> None:
        """A date was picked (or cleared); any previous slot is dropped."""
        if self.state is SelectionState.SUBMITTED:
            return
        self._clear()
        self.state = SelectionState.DATE_CHOSEN if date else SelectionState.NO_DATE

    def invalidate(self) -> None:
        """The query changed; drop the slot but keep the date."""
        if self.state is SelectionState.SLOT_CHOSEN:
            logger.debug(f"Dropping selection {self.place_id}@{self.time}")
            self._clear()
            self.state = SelectionState.DATE_CHOSEN

    def select(self, place: PlaceAvailability, time: str) -> bool:
        """Select a slot of ``place``.

        Args:
            place: The place as present in the current availability
            time: Slot start time

        Returns:
            True if the slot is now the selection (also when it already was)
        """
        if self.state in (SelectionState.NO_DATE, SelectionState.SUBMITTED):
            return False

        slot = place.slot(time)
        if slot is None or not slot.available:
            return False

        self.place_id = place.id
        self.time = time
        self.state = SelectionState.SLOT_CHOSEN
        return True

    def revalidate(self, places: Iterable[PlaceAvailability]) -> None:
        """Drop the selection if fresh availability no longer offers it."""
        if not self.has_slot:
            return
        for place in places:
            if place.id == self.place_id:
                slot = place.slot(self.time)
                if slot is not None and slot.available:
                    return
        self.invalidate()

    def mark_submitted(self) -> None:
        if not self.has_slot:
            raise ValueError("Cannot submit without a selected slot")
        self.state = SelectionState.SUBMITTED

    def _clear(self) -> None:
        self.place_id = None
        self.time = None
