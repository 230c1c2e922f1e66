"""Push notifications for restaurant owners."""

from restobook.push.bridge import (
    WORKER_SCRIPT,
    PushBridge,
    PushPlatform,
    PushSubscription,
    url_base64_to_bytes,
)
from restobook.push.worker import (
    Notification,
    NotificationOptions,
    build_notification,
    handle_notification_click,
)

__all__ = [
    "WORKER_SCRIPT",
    "Notification",
    "NotificationOptions",
    "PushBridge",
    "PushPlatform",
    "PushSubscription",
    "build_notification",
    "handle_notification_click",
    "url_base64_to_bytes",
]
