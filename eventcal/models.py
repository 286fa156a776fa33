"""Data models for recurrence resolution and the rolling calendar."""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .datetime_utils import format_occurrence_label, to_local_iso


class RecurrenceInterval(str, Enum):
    """Supported repeat intervals for recurring events."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class EventType(str, Enum):
    """Event types shown on the calendar."""

    LIGHTNING = "Lightning"
    REGULAR = "Regular"
    SPECIAL = "Special"


# Sunday = 0 .. Saturday = 6
WEEKDAY_MIN = 0
WEEKDAY_MAX = 6

# 1st..4th, 5 = last occurrence in the month
WEEK_OF_MONTH_MIN = 1
WEEK_OF_MONTH_MAX = 5
LAST_WEEK_OF_MONTH = 5


class RecurrenceRule(BaseModel):
    """Abstract repeat description stored against an event.

    ``interval`` is the tag: weekly rules read ``weekday``, monthly rules read
    ``weekday`` and ``week_of_month``, daily rules read neither. Missing values
    fall back to the anchor's own weekday / ordinal week at projection time.
    """

    model_config = ConfigDict(frozen=True)

    interval: RecurrenceInterval
    weekday: Optional[int] = Field(default=None, ge=WEEKDAY_MIN, le=WEEKDAY_MAX)
    week_of_month: Optional[int] = Field(
        default=None, ge=WEEK_OF_MONTH_MIN, le=WEEK_OF_MONTH_MAX
    )


class AnchorTime(BaseModel):
    """Wall-clock time of day every projected occurrence inherits."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)
    reference_date: Optional[datetime.date] = Field(
        default=None, description="Date of the event's persisted start, used for rule defaults"
    )
    duration: Optional[datetime.timedelta] = Field(
        default=None, description="Length of each occurrence; None means no end time"
    )

    @field_validator("duration")
    @classmethod
    def _duration_not_negative(
        cls, value: Optional[datetime.timedelta]
    ) -> Optional[datetime.timedelta]:
        if value is not None and value < datetime.timedelta(0):
            raise ValueError("duration must not be negative")
        return value

    @classmethod
    def from_start(
        cls, start: datetime.datetime, end: Optional[datetime.datetime] = None
    ) -> AnchorTime:
        """Build an anchor from an event's persisted start (and optional end)."""
        duration = None
        if end is not None and end >= start:
            duration = end - start
        return cls(
            hour=start.hour,
            minute=start.minute,
            reference_date=start.date(),
            duration=duration,
        )

    def on(self, day: datetime.date) -> datetime.datetime:
        """Return this time of day on ``day``."""
        return datetime.datetime(day.year, day.month, day.day, self.hour, self.minute)


class Occurrence(BaseModel):
    """A single concrete date/time instance of a recurring rule."""

    start: datetime.datetime
    end: Optional[datetime.datetime] = None
    label: str

    @classmethod
    def at(
        cls, start: datetime.datetime, duration: Optional[datetime.timedelta] = None
    ) -> Occurrence:
        end = start + duration if duration is not None else None
        return cls(start=start, end=end, label=format_occurrence_label(start))

    @property
    def start_iso(self) -> str:
        return to_local_iso(self.start)

    @property
    def end_iso(self) -> Optional[str]:
        return to_local_iso(self.end) if self.end is not None else None


class EventTimingInput(BaseModel):
    """Raw recurrence and time fields captured by the event-creation form.

    Values arrive as the form layer holds them: strings for dates and times,
    ints (or numeric strings) for the weekday and ordinal week. Parsing of the
    strings is left to the first-occurrence resolver so malformed values turn
    into a user-facing message instead of a validation fault.
    """

    event_type: EventType = EventType.REGULAR
    repeat_interval: Optional[RecurrenceInterval] = None
    recurrence_start_date: Optional[str] = None
    recurrence_weekday: Optional[int] = Field(default=None, ge=WEEKDAY_MIN, le=WEEKDAY_MAX)
    recurrence_week_of_month: Optional[int] = Field(
        default=None, ge=WEEK_OF_MONTH_MIN, le=WEEK_OF_MONTH_MAX
    )
    start_time_time: Optional[str] = None
    end_time_time: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @field_validator(
        "repeat_interval", "recurrence_weekday", "recurrence_week_of_month", mode="before"
    )
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        # Select inputs submit "" for "not chosen"
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_recurring(self) -> bool:
        return self.event_type == EventType.REGULAR and self.repeat_interval is not None


class FirstOccurrenceResult(BaseModel):
    """Outcome of resolving the first concrete start/end for a new event."""

    success: bool
    start_iso: Optional[str] = None
    end_iso: Optional[str] = None
    error_message: Optional[str] = None

    is_recurring: bool = False
    recurrence_interval: Optional[RecurrenceInterval] = None
    recurrence_weekday: Optional[int] = None
    recurrence_week_of_month: Optional[int] = None

    @classmethod
    def failure(cls, message: str) -> FirstOccurrenceResult:
        return cls(success=False, error_message=message)

    def to_persistence_payload(self) -> dict[str, Any]:
        """Record fields handed to the event store.

        Raises:
            ValueError: If called on a failed result.
        """
        if not self.success:
            raise ValueError(f"cannot persist a failed resolution: {self.error_message}")

        payload: dict[str, Any] = {
            "start_time": self.start_iso,
            "end_time": self.end_iso,
            "is_recurring": self.is_recurring,
            "recurrence_interval": (
                self.recurrence_interval.value if self.recurrence_interval else None
            ),
        }
        if self.recurrence_weekday is not None:
            payload["recurrence_weekday"] = self.recurrence_weekday
        if self.recurrence_week_of_month is not None:
            payload["recurrence_week_of_month"] = self.recurrence_week_of_month
        return payload


class CalendarEventSummary(BaseModel):
    """Event row fetched for the calendar display."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    date: datetime.date
    event_type: EventType = Field(default=EventType.REGULAR, alias="eventType")
    is_recurring: bool = Field(default=False, alias="isRecurring")
    category_name: Optional[str] = Field(default=None, alias="categoryName")

    @field_validator("event_type", mode="before")
    @classmethod
    def _default_event_type(cls, value: Any) -> Any:
        # Rows stored without a type are shown as Regular
        return value or EventType.REGULAR


class CalendarWindow(BaseModel):
    """35 consecutive dates starting on a Sunday."""

    model_config = ConfigDict(frozen=True)

    start_date: datetime.date
    days: list[datetime.date]

    @property
    def end_date(self) -> datetime.date:
        return self.days[-1]

    @property
    def dominant_month_key(self) -> Optional[str]:
        """``YYYY-MM`` of the month holding at least 21 of the days, if any."""
        from .calendar_window import dominant_month_key

        return dominant_month_key(self)

    @property
    def title(self) -> str:
        from .calendar_window import window_title

        return window_title(self)


class CalendarCell(BaseModel):
    """One day of the calendar grid with the events placed into it."""

    date: datetime.date
    events: list[CalendarEventSummary] = Field(default_factory=list)
    is_today: bool = False
    is_out_of_month: bool = False


class QuickJumpOption(BaseModel):
    """Named window start offered in the date-range selector."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str
    start_date: datetime.date
