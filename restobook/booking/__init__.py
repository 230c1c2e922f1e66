"""Availability, slot selection and reservation lifecycle."""

from restobook.booking.availability import AvailabilityController, AvailabilityKey
from restobook.booking.flow import BookingFlow
from restobook.booking.pending import PendingSelection, PendingSelectionStore
from restobook.booking.reservations import MyReservations, OwnerInbox
from restobook.booking.selection import SelectionState, SlotSelection

__all__ = [
    "AvailabilityController",
    "AvailabilityKey",
    "BookingFlow",
    "MyReservations",
    "OwnerInbox",
    "PendingSelection",
    "PendingSelectionStore",
    "SelectionState",
    "SlotSelection",
]
