"""Tests for the slot selection state machine."""

import pytest

from restobook.booking import SelectionState, SlotSelection
from restobook.models import PlaceAvailability, TimeSlot


@pytest.fixture
def table():
    return PlaceAvailability(
        id=1,
        name="Stol #2",
        capacity=4,
        slots=(
            TimeSlot(time="18:00:00", available=True),
            TimeSlot(time="19:00:00", available=False),
            TimeSlot(time="20:00:00", available=True),
        ),
    )


@pytest.fixture
def selection():
    selection = SlotSelection()
    selection.choose_date("2025-06-01")
    return selection


class TestSlotSelection:
    """Tests for SlotSelection transitions."""

    def test_starts_without_date(self):
        assert SlotSelection().state is SelectionState.NO_DATE

    def test_cannot_select_without_date(self, table):
        selection = SlotSelection()

        assert selection.select(table, "18:00:00") is False
        assert selection.state is SelectionState.NO_DATE

    def test_select_available_slot(self, selection, table):
        assert selection.select(table, "18:00:00") is True

        assert selection.state is SelectionState.SLOT_CHOSEN
        assert selection.is_selected(1, "18:00:00")

    def test_unavailable_slot_is_not_selectable(self, selection, table):
        assert selection.select(table, "19:00:00") is False
        assert selection.select(table, "23:00:00") is False
        assert selection.state is SelectionState.DATE_CHOSEN

    def test_second_selection_replaces_first(self, selection, table):
        selection.select(table, "18:00:00")
        selection.select(table, "20:00:00")

        assert selection.is_selected(1, "20:00:00")
        assert not selection.is_selected(1, "18:00:00")

    def test_reselecting_is_idempotent(self, selection, table):
        selection.select(table, "18:00:00")

        assert selection.select(table, "18:00:00") is True
        assert selection.state is SelectionState.SLOT_CHOSEN
        assert selection.is_selected(1, "18:00:00")

    def test_new_date_clears_selection(self, selection, table):
        selection.select(table, "18:00:00")

        selection.choose_date("2025-06-02")

        assert selection.state is SelectionState.DATE_CHOSEN
        assert selection.place_id is None
        assert selection.time is None

    def test_clearing_date_returns_to_start(self, selection):
        selection.choose_date("")
        assert selection.state is SelectionState.NO_DATE

    def test_invalidate_keeps_date(self, selection, table):
        selection.select(table, "18:00:00")

        selection.invalidate()

        assert selection.state is SelectionState.DATE_CHOSEN
        assert selection.time is None

    def test_revalidate_keeps_offered_slot(self, selection, table):
        selection.select(table, "18:00:00")

        selection.revalidate([table])

        assert selection.is_selected(1, "18:00:00")

    def test_revalidate_drops_vanished_slot(self, selection, table):
        selection.select(table, "18:00:00")
        booked = table.model_copy(
            update={"slots": (TimeSlot(time="18:00:00", available=False),)}
        )

        selection.revalidate([booked])

        assert selection.state is SelectionState.DATE_CHOSEN

    def test_revalidate_drops_missing_place(self, selection, table):
        selection.select(table, "18:00:00")

        selection.revalidate([])

        assert selection.has_slot is False

    def test_submitted_is_terminal(self, selection, table):
        selection.select(table, "18:00:00")
        selection.mark_submitted()

        selection.choose_date("2025-06-05")
        assert selection.select(table, "20:00:00") is False
        assert selection.state is SelectionState.SUBMITTED

    def test_submit_requires_slot(self, selection):
        with pytest.raises(ValueError, match="without a selected slot"):
            selection.mark_submitted()
