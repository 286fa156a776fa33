"""Local wall-clock date/time helpers for eventcal.

Everything here works on naive datetimes: the scheduling core deliberately
ignores timezones and treats every value as the viewer's local wall clock.
"""

from __future__ import annotations

import datetime
import logging
import os
import re
from typing import Any, Callable, Optional

from dateutil import parser as date_parser
from dateutil.rrule import FR, MO, SA, SU, TH, TU, WE

from .exceptions import TimingInputError

logger = logging.getLogger(__name__)

# Injected "now" provider; tests and the CLI pass a fixed one
Clock = Callable[[], datetime.datetime]

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
MONTH_ABBRS = [name[:3] for name in MONTH_NAMES]
WEEKDAY_ABBRS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# dateutil weekday constants indexed Sunday = 0 .. Saturday = 6
RRULE_WEEKDAYS = (SU, MO, TU, WE, TH, FR, SA)

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def weekday_index(day: datetime.date) -> int:
    """Weekday with Sunday = 0 .. Saturday = 6.

    Python's ``date.weekday()`` counts from Monday; the calendar grid and the
    stored recurrence rules count from Sunday.
    """
    return (day.weekday() + 1) % 7


def rrule_weekday(index: int, nth: Optional[int] = None) -> Any:
    """dateutil weekday for a Sunday-first ``index``, optionally the ``nth`` in its period."""
    wd = RRULE_WEEKDAYS[index]
    return wd(nth) if nth is not None else wd


def month_key(day: datetime.date) -> str:
    """``YYYY-MM`` key for the month containing ``day``."""
    return f"{day.year:04d}-{day.month:02d}"


def to_local_iso(value: datetime.datetime) -> str:
    """Format a wall-clock datetime as ``YYYY-MM-DDTHH:MM:SS``."""
    return value.replace(tzinfo=None, microsecond=0).isoformat()


def format_occurrence_label(value: datetime.datetime) -> str:
    """Short en-US label, e.g. ``Mon, Jan 5, 9:00 AM``."""
    hour12 = value.hour % 12 or 12
    ampm = "AM" if value.hour < 12 else "PM"
    return (
        f"{WEEKDAY_ABBRS[weekday_index(value.date())]}, "
        f"{MONTH_ABBRS[value.month - 1]} {value.day}, "
        f"{hour12}:{value.minute:02d} {ampm}"
    )


def parse_time_of_day(value: Optional[str]) -> tuple[int, int]:
    """Parse a 24-hour ``HH:MM`` string.

    Raises:
        TimingInputError: If the value is missing or not a valid time.
    """
    if value is None or not value.strip():
        raise TimingInputError("time of day is required")

    match = _TIME_RE.match(value.strip())
    if not match:
        raise TimingInputError(f"invalid time of day: {value!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise TimingInputError(f"time of day out of range: {value!r}")
    return hour, minute


def parse_form_date(value: Optional[str]) -> datetime.date:
    """Parse a date typed into the form.

    Accepts the masked ``MM/DD/YYYY`` input (any separators, eight digits) and
    plain ISO ``YYYY-MM-DD``. Years outside 1900..2100 are rejected.

    Raises:
        TimingInputError: If the value is missing or not a valid date.
    """
    if value is None or not value.strip():
        raise TimingInputError("date is required")

    text = value.strip()
    try:
        if re.match(r"^\d{4}-\d{2}-\d{2}$", text):
            parsed = datetime.date.fromisoformat(text)
        else:
            digits = re.sub(r"\D", "", text)
            if len(digits) != 8:
                raise TimingInputError(f"invalid date: {value!r}")
            month, day, year = int(digits[0:2]), int(digits[2:4]), int(digits[4:8])
            parsed = datetime.date(year, month, day)
    except ValueError as exc:
        raise TimingInputError(f"invalid date: {value!r}") from exc

    if not 1900 <= parsed.year <= 2100:
        raise TimingInputError(f"date out of range: {value!r}")
    return parsed


def parse_local_datetime(value: Optional[str]) -> datetime.datetime:
    """Parse an ISO-8601 date-time and keep its wall-clock reading.

    Any offset in the input is dropped rather than converted.

    Raises:
        TimingInputError: If the value is missing or unparseable.
    """
    if value is None or not value.strip():
        raise TimingInputError("date and time are required")
    try:
        parsed = date_parser.isoparse(value.strip())
    except (ValueError, OverflowError) as exc:
        raise TimingInputError(f"invalid date-time: {value!r}") from exc
    return parsed.replace(tzinfo=None, microsecond=0)


def local_now() -> datetime.datetime:
    """Current local wall-clock time.

    Can be overridden for testing via the EVENTCAL_TEST_TIME environment
    variable (ISO 8601, e.g. "2025-03-10T10:00:00"). An offset, if present, is
    dropped.
    """
    test_time = os.environ.get("EVENTCAL_TEST_TIME")
    if test_time:
        try:
            return parse_local_datetime(test_time)
        except TimingInputError as e:
            logger.warning("Failed to parse EVENTCAL_TEST_TIME=%r: %s", test_time, e)

    return datetime.datetime.now().replace(microsecond=0)


def fixed_clock(value: datetime.datetime) -> Clock:
    """Clock that always returns ``value``."""

    def _clock() -> datetime.datetime:
        return value

    return _clock
