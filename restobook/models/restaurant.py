"""Restaurant, place and menu data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ReservationMode(str, Enum):
    """How a restaurant accepts reservations."""

    AUTO = "auto"
    MANUAL = "manual"


class Feature(BaseModel):
    """A searchable amenity (wifi, terrace, ...)."""

    id: int
    name: str
    icon: str = ""


class WorkingHours(BaseModel):
    """Opening hours for one day of the week."""

    day_of_week: int = Field(..., ge=0, le=6)
    day_name: str = ""
    open_time: str
    close_time: str
    is_closed: bool = False


class RestaurantImage(BaseModel):
    """A photo in the restaurant gallery."""

    id: int
    url: str
    is_main: bool = False
    order: int = 0


class Restaurant(BaseModel):
    """Restaurant information."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="Restaurant ID")
    name: str = Field(..., description="Restaurant name")
    slug: str = Field(..., description="URL slug")
    description: str | None = None
    type: str = Field("restaurant", description="restaurant, cafe, choyxona, fastfood")
    type_display: str | None = None
    address: str = ""
    latitude: float | None = None
    longitude: float | None = None
    phone: str | None = None
    instagram: str | None = None
    telegram: str | None = None
    average_check: float | None = None
    features: list[Feature] = Field(default_factory=list)
    working_hours: list[WorkingHours] = Field(default_factory=list)
    images: list[RestaurantImage] = Field(default_factory=list)
    reservation_mode: ReservationMode = ReservationMode.MANUAL
    is_open: bool = False
    is_active: bool = True
    rating: float | None = None
    review_count: int = 0
    main_image: str | None = None
    slot_duration: int | None = Field(None, description="Slot length in minutes")
    min_booking_hours: int | None = Field(
        None, description="Minimum lead time before a booking"
    )


class Place(BaseModel):
    """A bookable seating unit (table, booth, VIP room, terrace)."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    type: str = "table"
    type_display: str | None = None
    capacity: int = Field(..., ge=1)
    min_capacity: int | None = None
    deposit_amount: float | None = None
    floor: int | None = None
    description: str | None = None
    is_active: bool = True


class MenuItem(BaseModel):
    """A dish on the menu."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    description: str | None = None
    price: float
    image: str | None = None
    is_available: bool = True
    category: int | None = None


class MenuCategory(BaseModel):
    """A menu section with its items."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    description: str | None = None
    order: int = 0
    is_active: bool = True
    items: list[MenuItem] = Field(default_factory=list)
