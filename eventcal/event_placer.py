"""Placement of events into the calendar grid's day cells."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Sequence
from typing import Any, Optional

from .calendar_window import dominant_month_key
from .datetime_utils import month_key
from .models import CalendarCell, CalendarEventSummary, CalendarWindow, EventType

logger = logging.getLogger(__name__)

MAX_EVENTS_PER_CELL = 3
DEFAULT_THEME_EMOJI = "📅"

# Lower sorts first
EVENT_TYPE_PRIORITY: dict[EventType, int] = {
    EventType.SPECIAL: 0,
    EventType.LIGHTNING: 1,
    EventType.REGULAR: 2,
}


class CalendarEventPlacer:
    """Assigns fetched events to the day cells of a calendar window."""

    def __init__(self, max_events_per_cell: int = MAX_EVENTS_PER_CELL):
        """Initialize event placer.

        Args:
            max_events_per_cell: Events kept per day; the rest are dropped
        """
        if max_events_per_cell < 1:
            raise ValueError(f"max_events_per_cell must be positive, got {max_events_per_cell}")
        self.max_events_per_cell = max_events_per_cell

    def place_events(
        self,
        window: CalendarWindow,
        events: Iterable[CalendarEventSummary],
        today: Optional[datetime.date] = None,
    ) -> list[CalendarCell]:
        """Build one cell per window day holding that day's top events.

        Business rules:
        1. Recurring events are never placed
        2. Events are ordered Special, Lightning, Regular; ties keep input order
        3. Each cell keeps at most ``max_events_per_cell`` events

        Args:
            window: Window produced by ``build_window``
            events: Event rows fetched for the window's date range
            today: Date to flag as today, if any

        Returns:
            35 cells in window order
        """
        by_day: dict[datetime.date, list[CalendarEventSummary]] = {}
        skipped_recurring = 0
        for event in events:
            if event.is_recurring:
                skipped_recurring += 1
                continue
            by_day.setdefault(event.date, []).append(event)

        if skipped_recurring:
            logger.debug("Left %d recurring event(s) out of the calendar grid", skipped_recurring)

        dominant = dominant_month_key(window)
        cells = []
        for day in window.days:
            cells.append(
                CalendarCell(
                    date=day,
                    events=self._top_events(by_day.get(day, [])),
                    is_today=today is not None and day == today,
                    is_out_of_month=dominant is not None and month_key(day) != dominant,
                )
            )
        return cells

    def _top_events(self, events: Sequence[CalendarEventSummary]) -> list[CalendarEventSummary]:
        ranked = sorted(events, key=lambda ev: EVENT_TYPE_PRIORITY[ev.event_type])
        if len(ranked) > self.max_events_per_cell:
            logger.debug(
                "Dropping %d event(s) on %s beyond the cell limit",
                len(ranked) - self.max_events_per_cell,
                ranked[0].date,
            )
        return ranked[: self.max_events_per_cell]


def place_events(
    window: CalendarWindow,
    events: Iterable[CalendarEventSummary],
    today: Optional[datetime.date] = None,
) -> list[CalendarCell]:
    """Place events with the default three-per-cell limit."""
    return CalendarEventPlacer().place_events(window, events, today)


def theme_emoji(category_name: Optional[str], categories: Iterable[Any] = ()) -> str:
    """Emoji for an event's category by exact name, with a calendar fallback.

    ``categories`` holds mappings or objects with ``name`` and ``emoji``.
    """
    if not category_name or not category_name.strip():
        return DEFAULT_THEME_EMOJI
    wanted = category_name.strip()
    for category in categories:
        if isinstance(category, dict):
            name, emoji = category.get("name"), category.get("emoji")
        else:
            name, emoji = getattr(category, "name", None), getattr(category, "emoji", None)
        if name == wanted:
            return (emoji or "").strip() or DEFAULT_THEME_EMOJI
    return DEFAULT_THEME_EMOJI
