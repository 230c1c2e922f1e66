"""Push event and notification click handling of the background worker."""

import json
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_URL = "/owner/reservations"
DEFAULT_ICON = "/icon-192.png"
DEFAULT_BADGE = "/badge-72.png"
DEFAULT_TAG = "reservation-notification"


class NotificationAction(BaseModel):
    action: str
    title: str


class NotificationOptions(BaseModel):
    """Options passed to the platform's showNotification."""

    body: str
    icon: str = DEFAULT_ICON
    badge: str = DEFAULT_BADGE
    vibrate: list[int] = Field(default_factory=lambda: [200, 100, 200])
    tag: str = DEFAULT_TAG
    renotify: bool = True
    require_interaction: bool = True
    data: dict = Field(default_factory=dict)
    actions: list[NotificationAction] = Field(
        default_factory=lambda: [
            NotificationAction(action="view", title="View"),
            NotificationAction(action="close", title="Close"),
        ]
    )


class Notification(BaseModel):
    title: str
    options: NotificationOptions


def build_notification(data: bytes | str | None) -> Notification:
    """Turn a push payload into a notification.

    The payload is JSON ``{title, body, icon, badge, url, tag}`` merged over
    defaults; a payload that is not a JSON object becomes the body text.
    """
    fields = {
        "title": "New reservation!",
        "body": "You have a new reservation",
        "icon": DEFAULT_ICON,
        "badge": DEFAULT_BADGE,
        "url": DEFAULT_URL,
    }

    if data:
        text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
        try:
            payload = json.loads(text)
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            fields.update(payload)
        else:
            fields["body"] = text

    return Notification(
        title=str(fields["title"]),
        options=NotificationOptions(
            body=str(fields["body"]),
            icon=fields.get("icon") or DEFAULT_ICON,
            badge=fields.get("badge") or DEFAULT_BADGE,
            tag=fields.get("tag") or DEFAULT_TAG,
            data={"url": fields.get("url") or DEFAULT_URL, "timestamp": int(time.time() * 1000)},
        ),
    )


class WindowClient(Protocol):
    """An open window controlled by the worker."""

    url: str

    async def navigate(self, url: str) -> None: ...

    async def focus(self) -> None: ...


async def handle_notification_click(
    action: str,
    url: str | None,
    windows: Sequence[WindowClient],
    open_window: Callable[[str], Awaitable[None]],
) -> str | None:
    """Route a click on a notification.

    Returns:
        The URL that was shown, or None when the notification was dismissed
    """
    if action == "close":
        return None

    target = url or DEFAULT_URL
    for window in windows:
        if "/owner" in window.url:
            await window.navigate(target)
            await window.focus()
            logger.debug(f"Focused existing window at {target}")
            return target

    await open_window(target)
    return target
