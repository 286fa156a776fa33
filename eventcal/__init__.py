"""eventcal - recurrence resolution and rolling calendar windows for community events.

All functions are pure and take "now" / "today" explicitly; the package never
reads the clock on its own except through ``datetime_utils.local_now``.
"""

__version__ = "0.1.0"

from .calendar_window import (
    build_window,
    can_go_next,
    current_option_value,
    next_window_start,
    previous_window_start,
    quick_jump_options,
    window_title,
)
from .event_placer import CalendarEventPlacer, place_events
from .exceptions import ConfigError, EventCalError, RecurrenceRuleError, TimingInputError
from .first_occurrence import recurrence_label, resolve_first_occurrence
from .models import (
    AnchorTime,
    CalendarCell,
    CalendarEventSummary,
    CalendarWindow,
    EventTimingInput,
    EventType,
    FirstOccurrenceResult,
    Occurrence,
    QuickJumpOption,
    RecurrenceInterval,
    RecurrenceRule,
)
from .nth_weekday import resolve_nth_weekday, week_of_month_for
from .occurrence_projector import OccurrenceProjector, project_occurrences

__all__ = [
    "AnchorTime",
    "CalendarCell",
    "CalendarEventPlacer",
    "CalendarEventSummary",
    "CalendarWindow",
    "ConfigError",
    "EventCalError",
    "EventTimingInput",
    "EventType",
    "FirstOccurrenceResult",
    "Occurrence",
    "OccurrenceProjector",
    "QuickJumpOption",
    "RecurrenceInterval",
    "RecurrenceRule",
    "RecurrenceRuleError",
    "TimingInputError",
    "build_window",
    "can_go_next",
    "current_option_value",
    "next_window_start",
    "place_events",
    "previous_window_start",
    "project_occurrences",
    "quick_jump_options",
    "recurrence_label",
    "resolve_first_occurrence",
    "resolve_nth_weekday",
    "week_of_month_for",
    "window_title",
]
