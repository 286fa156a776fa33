"""Unit tests for calendar_window module."""

import datetime

import pytest

from eventcal.calendar_window import (
    DAYS_IN_WINDOW,
    build_window,
    can_go_next,
    current_option_value,
    dominant_month_key,
    is_out_of_month,
    next_window_start,
    previous_window_start,
    quick_jump_options,
    select_quick_jump,
    window_title,
)
from eventcal.datetime_utils import weekday_index

pytestmark = pytest.mark.unit

TODAY = datetime.date(2025, 3, 10)


class TestBuildWindow:
    """Tests for build_window."""

    @pytest.mark.parametrize("offset", range(0, 400, 13))
    def test_window_shape(self, offset):
        """Windows hold 35 consecutive days starting on the Sunday on or before the anchor."""
        anchor = datetime.date(2024, 1, 1) + datetime.timedelta(days=offset)

        window = build_window(anchor)

        assert len(window.days) == DAYS_IN_WINDOW
        assert weekday_index(window.start_date) == 0
        assert window.start_date <= anchor < window.start_date + datetime.timedelta(days=7)
        assert window.days[0] == window.start_date
        for prev, nxt in zip(window.days, window.days[1:]):
            assert nxt - prev == datetime.timedelta(days=1)

    def test_rebuilding_from_start_is_idempotent(self):
        window = build_window(datetime.date(2025, 3, 12))

        assert window.start_date == datetime.date(2025, 3, 9)
        assert build_window(window.start_date) == window

    def test_accepts_datetime(self):
        window = build_window(datetime.datetime(2025, 3, 12, 23, 59))

        assert window.start_date == datetime.date(2025, 3, 9)

    def test_end_date(self):
        window = build_window(datetime.date(2023, 1, 1))

        assert window.end_date == datetime.date(2023, 2, 4)


class TestWindowTitle:
    """Tests for window_title and dominant month detection."""

    def test_dominant_month_gives_full_name(self):
        window = build_window(datetime.date(2023, 1, 1))

        assert dominant_month_key(window) == "2023-01"
        assert window.dominant_month_key == "2023-01"
        assert window_title(window) == "January"
        assert window.title == "January"

    def test_split_window_gives_abbreviated_range(self):
        """18 January days and 17 February days: no month reaches 21."""
        window = build_window(datetime.date(2024, 1, 14))

        assert dominant_month_key(window) is None
        assert window.dominant_month_key is None
        assert window_title(window) == "Jan - Feb"

    def test_split_window_greys_nothing_out(self):
        window = build_window(datetime.date(2024, 1, 14))

        assert not any(is_out_of_month(day, window) for day in window.days)

    def test_out_of_month_days_outside_dominant_month(self):
        window = build_window(datetime.date(2025, 2, 23))

        assert window_title(window) == "March"
        assert is_out_of_month(datetime.date(2025, 2, 23), window) is True
        assert is_out_of_month(datetime.date(2025, 3, 1), window) is False

    def test_split_across_year_end(self):
        """2023-12-17 window: 15 December days, 20 January days."""
        window = build_window(datetime.date(2023, 12, 17))

        assert window_title(window) == "Dec - Jan"


class TestQuickJump:
    """Tests for quick-jump options and selection."""

    def test_options_for_today(self):
        options = quick_jump_options(TODAY)

        assert [(opt.value, opt.label, opt.start_date) for opt in options] == [
            ("this-month", "This month", datetime.date(2025, 2, 23)),
            ("next-month", "Next month", datetime.date(2025, 3, 30)),
            ("2025-05", "May", datetime.date(2025, 4, 27)),
            ("2025-06", "June", datetime.date(2025, 6, 1)),
            ("2025-07", "July", datetime.date(2025, 6, 29)),
            ("2025-08", "August", datetime.date(2025, 7, 27)),
        ]

    def test_options_cross_year_end(self):
        options = quick_jump_options(datetime.date(2025, 11, 20))

        assert [opt.value for opt in options] == [
            "this-month",
            "next-month",
            "2026-01",
            "2026-02",
            "2026-03",
            "2026-04",
        ]

    def test_select_known_option(self):
        window = select_quick_jump("next-month", TODAY)

        assert window is not None
        assert window.start_date == datetime.date(2025, 3, 30)

    def test_select_unknown_option(self):
        assert select_quick_jump("2030-01", TODAY) is None

    def test_current_option_value_matches_option(self):
        assert current_option_value(datetime.date(2025, 2, 23), TODAY) == "this-month"
        assert current_option_value(datetime.date(2025, 6, 1), TODAY) == "2025-06"

    def test_current_option_value_falls_back_to_month_key(self):
        assert current_option_value(datetime.date(2025, 1, 5), TODAY) == "2025-01"


class TestNavigation:
    """Tests for previous/next window navigation."""

    def test_previous_moves_back_35_days(self):
        assert previous_window_start(datetime.date(2025, 2, 23)) == datetime.date(2025, 1, 19)

    def test_previous_is_never_limited(self):
        assert previous_window_start(datetime.date(1999, 1, 3)) == datetime.date(1998, 11, 29)

    def test_next_allowed_before_last_option(self):
        assert can_go_next(datetime.date(2025, 6, 1), TODAY) is True
        assert next_window_start(datetime.date(2025, 6, 1), TODAY) == datetime.date(2025, 7, 6)

    def test_next_disabled_at_last_option(self):
        assert can_go_next(datetime.date(2025, 7, 27), TODAY) is False
        assert next_window_start(datetime.date(2025, 7, 27), TODAY) is None

    def test_next_disabled_past_last_option(self):
        assert can_go_next(datetime.date(2025, 8, 31), TODAY) is False
