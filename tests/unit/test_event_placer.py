"""Unit tests for event_placer module."""

import datetime
from types import SimpleNamespace

import pytest

from eventcal.calendar_window import build_window
from eventcal.event_placer import (
    DEFAULT_THEME_EMOJI,
    CalendarEventPlacer,
    place_events,
    theme_emoji,
)
from eventcal.models import EventType

pytestmark = pytest.mark.unit

EVENT_DAY = datetime.date(2025, 3, 12)


@pytest.fixture
def window():
    return build_window(datetime.date(2025, 3, 2))


def cell_for(cells, day):
    return next(cell for cell in cells if cell.date == day)


class TestPlaceEvents:
    """Tests for placing events into day cells."""

    @pytest.mark.critical_path
    def test_priority_order_and_cap(self, window, make_event):
        """Special first, then Lightning in input order; Regulars are cut."""
        events = [
            make_event("r1", EVENT_DAY, EventType.REGULAR),
            make_event("l1", EVENT_DAY, EventType.LIGHTNING),
            make_event("r2", EVENT_DAY, EventType.REGULAR),
            make_event("s1", EVENT_DAY, EventType.SPECIAL),
            make_event("l2", EVENT_DAY, EventType.LIGHTNING),
        ]

        cells = place_events(window, events)

        assert [ev.id for ev in cell_for(cells, EVENT_DAY).events] == ["s1", "l1", "l2"]

    def test_one_cell_per_window_day(self, window):
        cells = place_events(window, [])

        assert [cell.date for cell in cells] == window.days
        assert all(cell.events == [] for cell in cells)

    def test_recurring_events_are_left_out(self, window, make_event):
        events = [
            make_event("weekly", EVENT_DAY, is_recurring=True),
            make_event("once", EVENT_DAY),
        ]

        cells = place_events(window, events)

        assert [ev.id for ev in cell_for(cells, EVENT_DAY).events] == ["once"]

    def test_events_outside_window_are_ignored(self, window, make_event):
        cells = place_events(window, [make_event("late", datetime.date(2025, 6, 1))])

        assert all(cell.events == [] for cell in cells)

    def test_ties_keep_input_order(self, window, make_event):
        events = [make_event(f"r{i}", EVENT_DAY) for i in range(3)]

        cells = place_events(window, events)

        assert [ev.id for ev in cell_for(cells, EVENT_DAY).events] == ["r0", "r1", "r2"]

    def test_custom_cell_limit(self, window, make_event):
        events = [make_event(f"r{i}", EVENT_DAY) for i in range(6)]

        cells = CalendarEventPlacer(max_events_per_cell=5).place_events(window, events)

        assert len(cell_for(cells, EVENT_DAY).events) == 5

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValueError):
            CalendarEventPlacer(max_events_per_cell=0)

    def test_today_and_out_of_month_flags(self, window):
        """The 2025-03-02 window is dominated by March and runs into early April."""
        cells = place_events(window, [], today=datetime.date(2025, 3, 10))

        today_cells = [cell.date for cell in cells if cell.is_today]
        greyed = [cell.date for cell in cells if cell.is_out_of_month]
        assert today_cells == [datetime.date(2025, 3, 10)]
        assert greyed == [datetime.date(2025, 4, d) for d in range(1, 6)]

    def test_no_today_flag_without_today(self, window):
        cells = place_events(window, [])

        assert not any(cell.is_today for cell in cells)


class TestThemeEmoji:
    """Tests for theme_emoji."""

    CATEGORIES = [
        {"name": "Hack Night", "emoji": "💻"},
        SimpleNamespace(name="Book Club", emoji="📚"),
        {"name": "Blank", "emoji": "  "},
    ]

    def test_matches_mapping_category(self):
        assert theme_emoji("Hack Night", self.CATEGORIES) == "💻"

    def test_matches_object_category(self):
        assert theme_emoji(" Book Club ", self.CATEGORIES) == "📚"

    @pytest.mark.parametrize("name", [None, "", "   ", "Unknown", "hack night", "Blank"])
    def test_falls_back_to_calendar(self, name):
        assert theme_emoji(name, self.CATEGORIES) == DEFAULT_THEME_EMOJI
