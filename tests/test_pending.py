"""Tests for the pending selection store."""

from datetime import datetime, timedelta

import pytest

from restobook.booking import PendingSelection, PendingSelectionStore


@pytest.fixture
def store(tmp_path):
    return PendingSelectionStore(tmp_path / "state" / "pending.db", ttl_minutes=30)


def selection(slug="cafe-x", age_minutes=0):
    return PendingSelection(
        slug=slug,
        date="2025-06-01",
        guest_count=4,
        place_id=1,
        time="18:00:00",
        saved_at=datetime.now() - timedelta(minutes=age_minutes),
    )


class TestPendingSelectionStore:
    """Tests for saving selections across a login redirect."""

    def test_save_and_load(self, store):
        store.save(selection())

        loaded = store.load("cafe-x")

        assert loaded.place_id == 1
        assert loaded.time == "18:00:00"
        assert store.load("other") is None

    def test_one_entry_per_restaurant(self, store):
        store.save(selection())
        store.save(selection().model_copy(update={"time": "20:00:00"}))

        assert store.load("cafe-x").time == "20:00:00"

    def test_expired_entry_is_absent(self, store):
        store.save(selection(age_minutes=31))

        assert store.load("cafe-x") is None
        assert store.cleanup_expired() == 0

    def test_cleanup_expired(self, store):
        store.save(selection("old", age_minutes=45))
        store.save(selection("fresh", age_minutes=5))

        assert store.cleanup_expired() == 1
        assert store.load("fresh") is not None

    def test_delete(self, store):
        store.save(selection())

        store.delete("cafe-x")

        assert store.load("cafe-x") is None
