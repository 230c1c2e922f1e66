"""Data models for availability queries and reservations."""

from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from restobook.models.restaurant import Place, Restaurant

T = TypeVar("T")


class ReservationStatus(str, Enum):
    """Lifecycle status of a reservation."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"

    @property
    def is_cancellable(self) -> bool:
        """Only open reservations may be canceled by the booker."""
        return self in (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)


# Status changes an owner may apply from the reservation inbox
OWNER_TRANSITIONS: dict[ReservationStatus, tuple[ReservationStatus, ...]] = {
    ReservationStatus.PENDING: (
        ReservationStatus.CONFIRMED,
        ReservationStatus.CANCELED,
    ),
    ReservationStatus.CONFIRMED: (
        ReservationStatus.COMPLETED,
        ReservationStatus.NO_SHOW,
        ReservationStatus.CANCELED,
    ),
}


class TimeSlot(BaseModel):
    """A single bookable time point."""

    model_config = ConfigDict(frozen=True)

    time: str = Field(..., description="Slot start, HH:MM:SS")
    available: bool = Field(..., description="Whether the slot can be booked")


class PlaceAvailability(BaseModel):
    """A place together with its slots for the queried date."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    type: str = "table"
    capacity: int = 0
    slots: tuple[TimeSlot, ...] = ()

    def slot(self, time: str) -> TimeSlot | None:
        """Find the slot starting at ``time``."""
        for slot in self.slots:
            if slot.time == time:
                return slot
        return None


class AvailabilityResponse(BaseModel):
    """Availability of one restaurant for one date and party size."""

    model_config = ConfigDict(frozen=True)

    date: str
    is_closed: bool = False
    places: tuple[PlaceAvailability, ...] = ()


class Reservation(BaseModel):
    """A booking record."""

    model_config = ConfigDict(extra="ignore")

    id: int
    restaurant: int | Restaurant
    restaurant_name: str | None = None
    place: int | Place | None = None
    place_name: str | None = None
    date: str
    time_from: str
    time_to: str | None = None
    guest_count: int = Field(..., ge=1)
    notes: str | None = None
    status: ReservationStatus = ReservationStatus.PENDING
    status_display: str | None = None
    created_at: datetime | None = None
    user_name: str | None = None
    user_phone: str | None = None


class ReservationCreate(BaseModel):
    """Payload for ``POST /reservations/``."""

    model_config = ConfigDict(frozen=True)

    restaurant: int
    place: int | None = None
    date: str = Field(..., min_length=1)
    time_from: str = Field(..., min_length=1)
    guest_count: int = Field(..., ge=1)
    notes: str | None = None

    def to_payload(self) -> dict:
        """Serialize for the wire, omitting unset optional fields."""
        payload = self.model_dump(exclude_none=True)
        if not payload.get("notes"):
            payload.pop("notes", None)
        return payload


class Page(BaseModel, Generic[T]):
    """A page of a paginated collection."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[T] = Field(default_factory=list)


class OwnerTodayStats(BaseModel):
    total: int = 0
    confirmed: int = 0
    pending: int = 0


class OwnerMonthStats(BaseModel):
    total: int = 0
    completed: int = 0
    canceled: int = 0
    no_show: int = 0


class OwnerStats(BaseModel):
    """Reservation counters shown on the owner dashboard."""

    today: OwnerTodayStats = Field(default_factory=OwnerTodayStats)
    month: OwnerMonthStats = Field(default_factory=OwnerMonthStats)


class AdminStats(BaseModel):
    """System-wide counters shown on the admin dashboard."""

    users: dict[str, int] = Field(default_factory=dict)
    restaurants: dict[str, int] = Field(default_factory=dict)
    reservations: dict[str, int] = Field(default_factory=dict)
