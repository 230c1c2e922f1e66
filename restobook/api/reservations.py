"""Booker-facing reservation endpoints."""

import logging

from restobook.api.client import ApiClient, parse
from restobook.models import AvailabilityResponse, Page, Reservation, ReservationCreate

logger = logging.getLogger(__name__)


class ReservationsApi:
    """``/reservations/`` endpoints used by the booking flow."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def availability(
        self, slug: str, date: str, guest_count: int
    ) -> AvailabilityResponse:
        """Fetch bookable slots of a restaurant for one date and party size.

        Args:
            slug: Restaurant slug
            date: ISO date (YYYY-MM-DD)
            guest_count: Party size; the server drops places that are too small

        Returns:
            AvailabilityResponse as computed by the server
        """
        data = await self.client.get(
            f"/reservations/availability/{slug}/",
            params={"date": date, "guest_count": guest_count},
        )
        return parse(AvailabilityResponse, data)

    async def create(self, reservation: ReservationCreate) -> Reservation:
        data = await self.client.post("/reservations/", json=reservation.to_payload())
        created = parse(Reservation, data)
        logger.info(f"Created reservation {created.id} ({created.status.value})")
        return created

    async def mine(self) -> Page[Reservation]:
        return parse(Page[Reservation], await self.client.get("/reservations/"))

    async def get(self, reservation_id: int) -> Reservation:
        data = await self.client.get(f"/reservations/{reservation_id}/")
        return parse(Reservation, data)

    async def cancel(self, reservation_id: int) -> None:
        await self.client.delete(f"/reservations/{reservation_id}/")
        logger.info(f"Canceled reservation {reservation_id}")
