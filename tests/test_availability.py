"""Tests for the availability query controller."""

import asyncio

import pytest
from fakes import availability_payload

from restobook.booking import AvailabilityController, AvailabilityKey
from restobook.exceptions import ApiError, TransportError
from restobook.models import AvailabilityResponse


class ScriptedAvailability:
    """Availability endpoint whose responses are released by the test."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, int]] = []
        self.pending: dict[tuple[str, int], asyncio.Future] = {}

    async def availability(self, slug: str, date: str, guest_count: int):
        self.calls.append((slug, date, guest_count))
        future = asyncio.get_running_loop().create_future()
        self.pending[(date, guest_count)] = future
        return await future

    def resolve(self, date: str, guest_count: int, payload: dict) -> None:
        self.pending[(date, guest_count)].set_result(
            AvailabilityResponse.model_validate(payload)
        )

    def fail(self, date: str, guest_count: int, error: Exception) -> None:
        self.pending[(date, guest_count)].set_exception(error)


def places_with(place_id: int, name: str) -> list[dict]:
    return [
        {
            "id": place_id,
            "name": name,
            "capacity": 4,
            "slots": [{"time": "18:00:00", "available": True}],
        }
    ]


@pytest.fixture
def api():
    return ScriptedAvailability()


@pytest.fixture
def controller(api):
    return AvailabilityController(api, "cafe-x")


async def settle():
    """Let started tasks reach their await point."""
    for _ in range(3):
        await asyncio.sleep(0)


class TestAvailabilityKey:
    """Tests for logical key validity."""

    @pytest.mark.parametrize(
        ("date", "guest_count", "valid"),
        [
            ("2025-06-01", 1, True),
            ("2025-06-01", 0, False),
            ("2025-06-01", -3, False),
            ("", 4, False),
        ],
    )
    def test_validity(self, date, guest_count, valid):
        assert AvailabilityKey(date=date, guest_count=guest_count).is_valid is valid


class TestAvailabilityController:
    """Tests for loading, superseding and failure handling."""

    @pytest.mark.parametrize(("date", "guest_count"), [("", 2), ("2025-06-01", 0)])
    async def test_invalid_key_issues_no_request(self, controller, api, date, guest_count):
        applied = await controller.load(date, guest_count)

        assert applied is False
        assert api.calls == []
        assert controller.places == ()
        assert controller.is_loading is False

    async def test_loading_then_applied(self, controller, api):
        task = asyncio.create_task(controller.load("2025-06-01", 4))
        await settle()

        assert controller.is_loading is True
        assert api.calls == [("cafe-x", "2025-06-01", 4)]

        api.resolve("2025-06-01", 4, availability_payload())
        assert await task is True

        assert controller.is_loading is False
        assert controller.error == ""
        assert [place.id for place in controller.places] == [1]
        assert controller.key == AvailabilityKey(date="2025-06-01", guest_count=4)

    async def test_latest_query_wins_over_arrival_order(self, controller, api):
        first = asyncio.create_task(controller.load("2025-06-01", 2))
        await settle()
        second = asyncio.create_task(controller.load("2025-06-02", 5))
        await settle()

        api.resolve("2025-06-02", 5, availability_payload("2025-06-02", places=places_with(9, "VIP")))
        assert await second is True
        api.resolve("2025-06-01", 2, availability_payload("2025-06-01", places=places_with(1, "Stol")))
        assert await first is False

        assert controller.response.date == "2025-06-02"
        assert [place.name for place in controller.places] == ["VIP"]
        assert controller.is_loading is False

    async def test_stale_response_does_not_clear_loading(self, controller, api):
        first = asyncio.create_task(controller.load("2025-06-01", 2))
        await settle()
        second = asyncio.create_task(controller.load("2025-06-02", 2))
        await settle()

        api.resolve("2025-06-01", 2, availability_payload("2025-06-01"))
        await first

        assert controller.is_loading is True
        assert controller.places == ()

        api.resolve("2025-06-02", 2, availability_payload("2025-06-02"))
        await second
        assert controller.is_loading is False

    async def test_stale_failure_is_discarded(self, controller, api):
        first = asyncio.create_task(controller.load("2025-06-01", 2))
        await settle()
        second = asyncio.create_task(controller.load("2025-06-02", 2))
        await settle()

        api.resolve("2025-06-02", 2, availability_payload("2025-06-02"))
        await second
        api.fail("2025-06-01", 2, TransportError("boom"))
        assert await first is False

        assert controller.error == ""
        assert len(controller.places) == 1

    async def test_invalid_key_supersedes_request_in_flight(self, controller, api):
        task = asyncio.create_task(controller.load("2025-06-01", 2))
        await settle()

        await controller.load("", 2)
        api.resolve("2025-06-01", 2, availability_payload())
        await task

        assert controller.places == ()
        assert controller.is_loading is False

    async def test_closed_day_shows_no_slots(self, controller, api):
        task = asyncio.create_task(controller.load("2025-06-01", 2))
        await settle()
        api.resolve("2025-06-01", 2, availability_payload(is_closed=True))
        await task

        assert controller.is_closed is True
        assert controller.places == ()
        assert controller.error == AvailabilityController.CLOSED_MESSAGE

    @pytest.mark.parametrize("error", [TransportError("timeout"), ApiError(500, None)])
    async def test_failure_surfaces_message(self, controller, api, error):
        task = asyncio.create_task(controller.load("2025-06-01", 2))
        await settle()
        api.fail("2025-06-01", 2, error)
        await task

        assert controller.error == AvailabilityController.LOAD_FAILED
        assert controller.places == ()
        assert controller.is_loading is False
        assert len(api.calls) == 1
