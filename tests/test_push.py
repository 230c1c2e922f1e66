"""Tests for the push subscription bridge and the worker handlers."""

import base64
import json

import pytest
from fakes import json_response

from restobook.push import (
    WORKER_SCRIPT,
    PushBridge,
    PushSubscription,
    build_notification,
    handle_notification_click,
    url_base64_to_bytes,
)

VAPID_KEY = base64.urlsafe_b64encode(b"\x04" + b"k" * 64).decode().rstrip("=")


class FakePlatform:
    """Browser push capabilities with scripted answers."""

    def __init__(self, supported=True, permission="default", answer="granted", worker=True):
        self.supported = supported
        self.permission = permission
        self.answer = answer
        self.worker = worker
        self.registered: list[str] = []
        self.keys: list[bytes] = []
        self.subscription: PushSubscription | None = None

    async def request_permission(self):
        self.permission = self.answer
        return self.answer

    async def register_worker(self, script):
        self.registered.append(script)
        return self.worker

    async def subscribe(self, application_server_key):
        self.keys.append(application_server_key)
        self.subscription = PushSubscription(
            endpoint="https://push.example/abc", p256dh="p256dh-key", auth="auth-key"
        )
        return self.subscription

    async def get_subscription(self):
        return self.subscription

    async def unsubscribe(self):
        self.subscription = None
        return True


@pytest.fixture
def vapid(fake_api):
    fake_api.add(
        "GET", "/notifications/vapid-public-key/", json_response(200, {"public_key": VAPID_KEY})
    )
    fake_api.add("POST", "/notifications/subscribe/", json_response(201))
    fake_api.add("POST", "/notifications/unsubscribe/", json_response(200))


class TestUrlBase64:
    def test_padding_is_restored(self):
        assert url_base64_to_bytes("aGk") == b"hi"
        assert url_base64_to_bytes("aGk=") == b"hi"

    def test_url_safe_alphabet(self):
        assert url_base64_to_bytes("-_8") == b"\xfb\xff"


class TestPushBridge:
    """Tests for subscribing and unsubscribing."""

    async def test_subscribe(self, backend, signed_in, fake_api, vapid):
        platform = FakePlatform()
        bridge = PushBridge(platform, backend.notifications)

        assert await bridge.subscribe() is True

        assert platform.registered == [WORKER_SCRIPT]
        assert platform.keys == [url_base64_to_bytes(VAPID_KEY)]
        sent = fake_api.body(fake_api.calls("POST", "/notifications/subscribe/")[0])
        assert sent == {
            "endpoint": "https://push.example/abc",
            "p256dh": "p256dh-key",
            "auth": "auth-key",
        }
        assert await bridge.is_subscribed() is True

    async def test_unsupported(self, backend, fake_api):
        bridge = PushBridge(FakePlatform(supported=False), backend.notifications)

        assert bridge.permission == "unsupported"
        assert await bridge.subscribe() is False
        assert await bridge.is_subscribed() is False
        assert fake_api.requests == []

    async def test_permission_denied(self, backend, fake_api, vapid):
        platform = FakePlatform(answer="denied")
        bridge = PushBridge(platform, backend.notifications)

        assert await bridge.subscribe() is False

        assert bridge.permission == "denied"
        assert platform.registered == []
        assert fake_api.requests == []

    async def test_worker_registration_failure(self, backend, fake_api, vapid):
        bridge = PushBridge(FakePlatform(worker=False), backend.notifications)

        assert await bridge.subscribe() is False
        assert fake_api.requests == []

    async def test_missing_vapid_key(self, backend, fake_api):
        fake_api.add("GET", "/notifications/vapid-public-key/", json_response(200, {}))
        platform = FakePlatform()
        bridge = PushBridge(platform, backend.notifications)

        assert await bridge.subscribe() is False
        assert platform.subscription is None

    async def test_server_rejects_subscription(self, backend, signed_in, fake_api, vapid):
        fake_api.add("POST", "/notifications/subscribe/", json_response(500))
        bridge = PushBridge(FakePlatform(), backend.notifications)

        assert await bridge.subscribe() is False

    async def test_unsubscribe(self, backend, signed_in, fake_api, vapid):
        platform = FakePlatform()
        bridge = PushBridge(platform, backend.notifications)
        await bridge.subscribe()

        assert await bridge.unsubscribe() is True

        assert platform.subscription is None
        sent = fake_api.body(fake_api.calls("POST", "/notifications/unsubscribe/")[0])
        assert sent == {"endpoint": "https://push.example/abc"}

    async def test_unsubscribe_without_subscription(self, backend, fake_api):
        bridge = PushBridge(FakePlatform(), backend.notifications)

        assert await bridge.unsubscribe() is True
        assert fake_api.requests == []


class TestBuildNotification:
    """Tests for turning push payloads into notifications."""

    def test_defaults_without_payload(self):
        notification = build_notification(None)

        assert notification.title == "New reservation!"
        assert notification.options.body == "You have a new reservation"
        assert notification.options.data["url"] == "/owner/reservations"
        assert notification.options.tag == "reservation-notification"
        assert [a.action for a in notification.options.actions] == ["view", "close"]

    def test_json_payload_overrides_defaults(self):
        payload = json.dumps(
            {"title": "Cafe X", "body": "4 guests at 18:00", "url": "/owner/reservations?id=42"}
        ).encode()

        notification = build_notification(payload)

        assert notification.title == "Cafe X"
        assert notification.options.body == "4 guests at 18:00"
        assert notification.options.data["url"] == "/owner/reservations?id=42"
        assert notification.options.icon == "/icon-192.png"

    def test_plain_text_becomes_body(self):
        notification = build_notification("Table 2 booked")

        assert notification.title == "New reservation!"
        assert notification.options.body == "Table 2 booked"

    def test_json_that_is_not_an_object(self):
        assert build_notification("[1, 2]").options.body == "[1, 2]"


class FakeWindow:
    def __init__(self, url):
        self.url = url
        self.focused = False

    async def navigate(self, url):
        self.url = url

    async def focus(self):
        self.focused = True


class TestNotificationClick:
    """Tests for routing notification clicks."""

    async def test_close_action(self):
        opened = []

        async def open_window(url):
            opened.append(url)

        assert await handle_notification_click("close", "/owner/x", [], open_window) is None
        assert opened == []

    async def test_reuses_owner_window(self):
        other = FakeWindow("https://app/place/cafe-x")
        owner = FakeWindow("https://app/owner/dashboard")
        opened = []

        async def open_window(url):
            opened.append(url)

        shown = await handle_notification_click(
            "view", "/owner/reservations", [other, owner], open_window
        )

        assert shown == "/owner/reservations"
        assert owner.url == "/owner/reservations"
        assert owner.focused is True
        assert other.focused is False
        assert opened == []

    async def test_opens_new_window(self):
        opened = []

        async def open_window(url):
            opened.append(url)

        shown = await handle_notification_click(
            "", None, [FakeWindow("https://app/")], open_window
        )

        assert shown == "/owner/reservations"
        assert opened == ["/owner/reservations"]
