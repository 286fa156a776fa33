"""Rolling 5-week calendar window: grid dates, title, and navigation."""

from __future__ import annotations

import datetime
import logging
from collections import Counter
from typing import Optional

from dateutil.relativedelta import relativedelta

from .datetime_utils import MONTH_ABBRS, MONTH_NAMES, month_key, weekday_index
from .models import CalendarWindow, QuickJumpOption

logger = logging.getLogger(__name__)

DAYS_IN_WINDOW = 35  # 5 weeks
DOMINANT_MONTH_MIN_DAYS = 21  # 3 of the 5 weeks
QUICK_JUMP_MONTHS = 6


def sunday_on_or_before(day: datetime.date) -> datetime.date:
    """Sunday that starts the week containing ``day``."""
    return day - datetime.timedelta(days=weekday_index(day))


def build_window(anchor_date: datetime.date) -> CalendarWindow:
    """Build the 35-day window whose first week contains ``anchor_date``."""
    if isinstance(anchor_date, datetime.datetime):
        anchor_date = anchor_date.date()
    start = sunday_on_or_before(anchor_date)
    days = [start + datetime.timedelta(days=i) for i in range(DAYS_IN_WINDOW)]
    return CalendarWindow(start_date=start, days=days)


def dominant_month_key(window: CalendarWindow) -> Optional[str]:
    """``YYYY-MM`` of the month holding at least 21 of the window's days."""
    counts = Counter(month_key(day) for day in window.days)
    for key, count in counts.items():
        if count >= DOMINANT_MONTH_MIN_DAYS:
            return key
    return None


def window_title(window: CalendarWindow) -> str:
    """Full name of the dominant month, else ``"Jan - Feb"`` style."""
    key = dominant_month_key(window)
    if key is not None:
        return MONTH_NAMES[int(key[5:7]) - 1]

    start_month = MONTH_ABBRS[window.start_date.month - 1]
    end_month = MONTH_ABBRS[window.end_date.month - 1]
    if start_month == end_month:
        return start_month
    return f"{start_month} - {end_month}"


def is_out_of_month(day: datetime.date, window: CalendarWindow) -> bool:
    """Whether ``day`` falls outside the window's dominant month.

    Windows without a dominant month grey nothing out.
    """
    key = dominant_month_key(window)
    return key is not None and month_key(day) != key


def quick_jump_options(today: datetime.date) -> list[QuickJumpOption]:
    """This month, next month, then the four months after that.

    Each option starts on the Sunday of the week containing the month's 1st.
    """
    this_month = today.replace(day=1)
    options: list[QuickJumpOption] = []
    for offset in range(QUICK_JUMP_MONTHS):
        first = this_month + relativedelta(months=offset)
        if offset == 0:
            value, label = "this-month", "This month"
        elif offset == 1:
            value, label = "next-month", "Next month"
        else:
            value, label = month_key(first), MONTH_NAMES[first.month - 1]
        options.append(
            QuickJumpOption(value=value, label=label, start_date=sunday_on_or_before(first))
        )
    return options


def select_quick_jump(value: str, today: datetime.date) -> Optional[CalendarWindow]:
    """Window for the quick-jump option named ``value``, or None if unknown."""
    for option in quick_jump_options(today):
        if option.value == value:
            return build_window(option.start_date)
    logger.debug("Unknown quick-jump option %r", value)
    return None


def current_option_value(start_date: datetime.date, today: datetime.date) -> str:
    """Selector value for a window start: the matching option or its month key."""
    for option in quick_jump_options(today):
        if option.start_date == start_date:
            return option.value
    return month_key(start_date)


def previous_window_start(start_date: datetime.date) -> datetime.date:
    return start_date - datetime.timedelta(days=DAYS_IN_WINDOW)


def can_go_next(start_date: datetime.date, today: datetime.date) -> bool:
    """Forward navigation stops at the furthest quick-jump option."""
    max_start = quick_jump_options(today)[-1].start_date
    return start_date < max_start


def next_window_start(start_date: datetime.date, today: datetime.date) -> Optional[datetime.date]:
    """Start of the following window, or None when navigation is disabled."""
    if not can_go_next(start_date, today):
        return None
    return start_date + datetime.timedelta(days=DAYS_IN_WINDOW)
