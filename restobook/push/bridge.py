"""Web push subscription bridge between the browser and the server."""

import base64
import logging
from typing import Literal, Protocol

from pydantic import BaseModel

from restobook.api.notifications import NotificationsApi
from restobook.exceptions import RestobookError

logger = logging.getLogger(__name__)

WORKER_SCRIPT = "/sw.js"

Permission = Literal["default", "granted", "denied", "unsupported"]


class PushSubscription(BaseModel):
    """A browser push subscription."""

    endpoint: str
    p256dh: str
    auth: str


class PushPlatform(Protocol):
    """Browser capabilities the bridge needs."""

    @property
    def supported(self) -> bool: ...

    @property
    def permission(self) -> Permission: ...

    async def request_permission(self) -> Permission: ...

    async def register_worker(self, script: str) -> bool: ...

    async def subscribe(self, application_server_key: bytes) -> PushSubscription: ...

    async def get_subscription(self) -> PushSubscription | None: ...

    async def unsubscribe(self) -> bool: ...


def url_base64_to_bytes(value: str) -> bytes:
    """Decode a URL-safe base64 VAPID key, adding missing padding."""
    padding = "=" * ((4 - len(value) % 4) % 4)
    return base64.urlsafe_b64decode(value + padding)


class PushBridge:
    """Subscribes an owner's browser to reservation notifications.

    Every operation reports success as a boolean; failures are logged and
    never raised.
    """

    def __init__(self, platform: PushPlatform, api: NotificationsApi) -> None:
        self.platform = platform
        self.api = api

    @property
    def is_supported(self) -> bool:
        return self.platform.supported

    @property
    def permission(self) -> Permission:
        if not self.is_supported:
            return "unsupported"
        return self.platform.permission

    async def subscribe(self) -> bool:
        """Ask for permission, register the worker and store the subscription."""
        if not self.is_supported:
            logger.info("Push not supported")
            return False

        try:
            permission = await self.platform.request_permission()
            if permission != "granted":
                logger.info("Notification permission denied")
                return False

            if not await self.platform.register_worker(WORKER_SCRIPT):
                logger.error("Service worker registration failed")
                return False

            public_key = await self._vapid_public_key()
            if not public_key:
                logger.error("No VAPID public key available")
                return False

            subscription = await self.platform.subscribe(url_base64_to_bytes(public_key))
            await self.api.subscribe(
                subscription.endpoint, subscription.p256dh, subscription.auth
            )
        except (RestobookError, OSError, ValueError) as e:
            logger.error(f"Push subscription failed: {e}")
            return False

        logger.info("Push subscription successful")
        return True

    async def unsubscribe(self) -> bool:
        if not self.is_supported:
            return False

        try:
            subscription = await self.platform.get_subscription()
            if subscription is not None:
                await self.platform.unsubscribe()
                await self.api.unsubscribe(subscription.endpoint)
        except (RestobookError, OSError) as e:
            logger.error(f"Push unsubscription failed: {e}")
            return False

        logger.info("Push unsubscription successful")
        return True

    async def is_subscribed(self) -> bool:
        if not self.is_supported:
            return False
        try:
            return await self.platform.get_subscription() is not None
        except OSError:
            return False

    async def _vapid_public_key(self) -> str | None:
        try:
            return await self.api.vapid_public_key()
        except RestobookError as e:
            logger.error(f"Failed to get VAPID key: {e}")
            return None
