"""Typed client for the reservation REST API."""

from collections.abc import Callable

import httpx

from restobook.api.admin import AdminApi
from restobook.api.auth import AuthApi
from restobook.api.client import ApiClient
from restobook.api.notifications import NotificationsApi
from restobook.api.owner import OwnerApi
from restobook.api.reservations import ReservationsApi
from restobook.api.restaurants import RestaurantsApi
from restobook.config import Config
from restobook.session import Session


class Backend:
    """One API client plus every resource group built on it."""

    def __init__(
        self,
        config: Config,
        session: Session,
        transport: httpx.AsyncBaseTransport | None = None,
        on_auth_expired: Callable[[], None] | None = None,
    ) -> None:
        self.client = ApiClient(
            config, session, transport=transport, on_auth_expired=on_auth_expired
        )
        self.session = session
        self.auth = AuthApi(self.client)
        self.restaurants = RestaurantsApi(self.client)
        self.reservations = ReservationsApi(self.client)
        self.owner = OwnerApi(self.client)
        self.admin = AdminApi(self.client)
        self.notifications = NotificationsApi(self.client)

    async def aclose(self) -> None:
        await self.client.aclose()


__all__ = [
    "AdminApi",
    "ApiClient",
    "AuthApi",
    "Backend",
    "NotificationsApi",
    "OwnerApi",
    "ReservationsApi",
    "RestaurantsApi",
]
