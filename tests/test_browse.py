"""Tests for the restaurant browse view and the search debouncer."""

import asyncio

import pytest
from fakes import json_response

from restobook.browse import BrowseView, Debouncer


def catalogue(*restaurants):
    return {"count": len(restaurants), "next": None, "previous": None, "results": list(restaurants)}


CAFE_X = {
    "id": 7,
    "name": "Cafe X",
    "slug": "cafe-x",
    "type": "cafe",
    "latitude": "42.4619",
    "longitude": "59.6166",
    "is_open": True,
}
NO_COORDINATES = {"id": 8, "name": "Somewhere", "slug": "somewhere", "latitude": None}


@pytest.fixture
def view(backend, navigator, config):
    return BrowseView(backend.restaurants, navigator, debounce=config.search_debounce)


class TestDebouncer:
    """Tests for coalescing bursts of input."""

    async def test_burst_runs_once(self):
        runs = []

        async def action():
            runs.append(True)

        debouncer = Debouncer(0.01, action)
        for _ in range(5):
            debouncer.trigger()
        await debouncer.flush()

        assert runs == [True]
        assert debouncer.pending is False

    async def test_cancel(self):
        runs = []

        async def action():
            runs.append(True)

        debouncer = Debouncer(0.01, action)
        debouncer.trigger()
        debouncer.cancel()
        await asyncio.sleep(0.03)

        assert runs == []


class TestBrowseView:
    """Tests for filtering, searching and map pins."""

    async def test_load(self, view, fake_api):
        fake_api.add("GET", "/restaurants/", json_response(200, catalogue(CAFE_X)))

        await view.load()

        assert [r.slug for r in view.restaurants] == ["cafe-x"]
        assert view.is_loading is False

    async def test_load_failure_empties_list(self, view, fake_api):
        fake_api.add(
            "GET",
            "/restaurants/",
            json_response(200, catalogue(CAFE_X)),
            json_response(500),
        )
        await view.load()

        await view.load()

        assert view.restaurants == []

    async def test_search_is_debounced(self, view, fake_api):
        fake_api.add("GET", "/restaurants/", json_response(200, catalogue(CAFE_X)))

        for text in ("c", "ca", "caf", " cafe "):
            view.set_search(text)
        await view.settle()

        calls = fake_api.calls("GET", "/restaurants/")
        assert len(calls) == 1
        assert calls[0].url.params["search"] == "cafe"

    async def test_type_filter(self, view, fake_api):
        fake_api.add("GET", "/restaurants/", json_response(200, catalogue()))

        await view.set_type("choyxona")

        assert fake_api.calls("GET", "/restaurants/")[0].url.params["type"] == "choyxona"

    async def test_all_types_sends_no_filter(self, view, fake_api):
        fake_api.add("GET", "/restaurants/", json_response(200, catalogue()))

        await view.set_type("")

        assert "type" not in fake_api.calls("GET", "/restaurants/")[0].url.params

    async def test_unknown_type(self, view):
        with pytest.raises(ValueError, match="Unknown restaurant type"):
            await view.set_type("bar")

    async def test_pins_skip_missing_coordinates(self, view, fake_api):
        fake_api.add("GET", "/restaurants/", json_response(200, catalogue(CAFE_X, NO_COORDINATES)))
        await view.load()

        pins = view.pins()

        assert [pin.slug for pin in pins] == ["cafe-x"]
        assert pins[0].latitude == pytest.approx(42.4619)

    async def test_open_navigates_to_place(self, view, fake_api, navigator):
        fake_api.add("GET", "/restaurants/", json_response(200, catalogue(CAFE_X)))
        await view.load()

        view.open(view.restaurants[0])

        assert navigator.current == "/place/cafe-x"
