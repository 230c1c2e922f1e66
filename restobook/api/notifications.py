"""Web push subscription endpoints."""

import logging

from restobook.api.client import ApiClient

logger = logging.getLogger(__name__)


class NotificationsApi:
    """``/notifications/`` endpoints."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def vapid_public_key(self) -> str | None:
        data = await self.client.get("/notifications/vapid-public-key/", auth=False)
        if isinstance(data, dict):
            return data.get("public_key")
        return None

    async def subscribe(self, endpoint: str, p256dh: str, auth: str) -> None:
        await self.client.post(
            "/notifications/subscribe/",
            json={"endpoint": endpoint, "p256dh": p256dh, "auth": auth},
        )

    async def unsubscribe(self, endpoint: str) -> None:
        await self.client.post("/notifications/unsubscribe/", json={"endpoint": endpoint})
