"""Data models for restobook."""

from restobook.models.reservation import (
    OWNER_TRANSITIONS,
    AdminStats,
    AvailabilityResponse,
    OwnerStats,
    Page,
    PlaceAvailability,
    Reservation,
    ReservationCreate,
    ReservationStatus,
    TimeSlot,
)
from restobook.models.restaurant import (
    Feature,
    MenuCategory,
    MenuItem,
    Place,
    ReservationMode,
    Restaurant,
    RestaurantImage,
    WorkingHours,
)
from restobook.models.user import AuthResponse, AuthTokens, User, UserRole

__all__ = [
    "OWNER_TRANSITIONS",
    "AdminStats",
    "AuthResponse",
    "AuthTokens",
    "AvailabilityResponse",
    "Feature",
    "MenuCategory",
    "MenuItem",
    "OwnerStats",
    "Page",
    "Place",
    "PlaceAvailability",
    "Reservation",
    "ReservationCreate",
    "ReservationMode",
    "ReservationStatus",
    "Restaurant",
    "RestaurantImage",
    "TimeSlot",
    "User",
    "UserRole",
    "WorkingHours",
]
