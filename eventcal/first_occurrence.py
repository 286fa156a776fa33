"""First concrete start/end for a newly created event.

Event creation happens from three places (the standalone form, the group
creation wizard, and a group's own "new event" page); all of them call
``resolve_first_occurrence`` with the raw form values.
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional

from .datetime_utils import (
    parse_form_date,
    parse_local_datetime,
    parse_time_of_day,
    to_local_iso,
)
from .exceptions import TimingInputError
from .models import (
    AnchorTime,
    EventTimingInput,
    FirstOccurrenceResult,
    RecurrenceInterval,
    RecurrenceRule,
)
from .occurrence_projector import MONTHLY_LOOKAHEAD_MONTHS, OccurrenceProjector, ProjectorConfig

logger = logging.getLogger(__name__)

START_REQUIRED_MESSAGE = "Start date and time are required."
MONTHLY_NOT_FOUND_MESSAGE = "Could not compute next monthly occurrence."

# (start_iso, end_iso)
_Resolved = tuple[str, Optional[str]]

_RECURRENCE_LABELS = {
    RecurrenceInterval.DAILY: "Repeats daily",
    RecurrenceInterval.WEEKLY: "Repeats weekly",
    RecurrenceInterval.MONTHLY: "Repeats monthly",
}


def recurrence_label(interval: Optional[str]) -> Optional[str]:
    """Human label for a stored recurrence interval, or None."""
    if not interval:
        return None
    try:
        return _RECURRENCE_LABELS[RecurrenceInterval(interval)]
    except ValueError:
        return None


def _combine(day: datetime.date, time_text: Optional[str]) -> datetime.datetime:
    hour, minute = parse_time_of_day(time_text)
    return datetime.datetime(day.year, day.month, day.day, hour, minute)


def _end_on(day: datetime.date, end_time_text: Optional[str]) -> Optional[str]:
    if end_time_text is None or not end_time_text.strip():
        return None
    return to_local_iso(_combine(day, end_time_text))


def _resolve_daily(
    timing: EventTimingInput, now: datetime.datetime, lookahead_months: int
) -> _Resolved:
    day = parse_form_date(timing.recurrence_start_date)
    start = _combine(day, timing.start_time_time)
    return to_local_iso(start), _end_on(day, timing.end_time_time)


def _first_projected(
    timing: EventTimingInput,
    interval: RecurrenceInterval,
    now: datetime.datetime,
    lookahead_months: int,
) -> Optional[_Resolved]:
    hour, minute = parse_time_of_day(timing.start_time_time)
    rule = RecurrenceRule(
        interval=interval,
        weekday=timing.recurrence_weekday,
        week_of_month=timing.recurrence_week_of_month,
    )
    projector = OccurrenceProjector(ProjectorConfig(monthly_lookahead_months=lookahead_months))
    occurrences = projector.project(AnchorTime(hour=hour, minute=minute), rule, now, 1)
    if not occurrences:
        return None
    start = occurrences[0].start
    return to_local_iso(start), _end_on(start.date(), timing.end_time_time)


def _resolve_weekly(
    timing: EventTimingInput, now: datetime.datetime, lookahead_months: int
) -> Optional[_Resolved]:
    if timing.recurrence_weekday is None:
        raise TimingInputError("weekly events need a weekday")
    return _first_projected(timing, RecurrenceInterval.WEEKLY, now, lookahead_months)


def _resolve_monthly(
    timing: EventTimingInput, now: datetime.datetime, lookahead_months: int
) -> Optional[_Resolved]:
    if timing.recurrence_weekday is None or timing.recurrence_week_of_month is None:
        raise TimingInputError("monthly events need a weekday and a week of the month")
    return _first_projected(timing, RecurrenceInterval.MONTHLY, now, lookahead_months)


_RESOLVERS = {
    RecurrenceInterval.DAILY: _resolve_daily,
    RecurrenceInterval.WEEKLY: _resolve_weekly,
    RecurrenceInterval.MONTHLY: _resolve_monthly,
}


def _resolve_single(timing: EventTimingInput) -> _Resolved:
    start = parse_local_datetime(timing.start_time)
    end = None
    if timing.end_time is not None and timing.end_time.strip():
        end = to_local_iso(parse_local_datetime(timing.end_time))
    return to_local_iso(start), end


def resolve_first_occurrence(
    timing: EventTimingInput,
    now: datetime.datetime,
    lookahead_months: int = MONTHLY_LOOKAHEAD_MONTHS,
) -> FirstOccurrenceResult:
    """Compute the start/end timestamps to persist for a new event.

    Args:
        timing: Raw recurrence and time fields from the creation form
        now: Current local wall-clock time
        lookahead_months: Months searched for a monthly occurrence

    Returns:
        A successful result carrying ISO start/end plus the rule fields to
        store, or a failed result with a user-facing ``error_message``.
    """
    if not timing.is_recurring:
        try:
            start_iso, end_iso = _resolve_single(timing)
        except TimingInputError as e:
            logger.info("Rejected one-off event timing: %s", e)
            return FirstOccurrenceResult.failure(START_REQUIRED_MESSAGE)
        return FirstOccurrenceResult(success=True, start_iso=start_iso, end_iso=end_iso)

    interval = RecurrenceInterval(timing.repeat_interval)

    try:
        resolved = _RESOLVERS[interval](timing, now, lookahead_months)
    except TimingInputError as e:
        logger.info("Rejected %s event timing: %s", interval.value, e)
        return FirstOccurrenceResult.failure(START_REQUIRED_MESSAGE)

    if resolved is None:
        logger.warning(
            "No monthly occurrence within %d months (week_of_month=%s, weekday=%s)",
            lookahead_months,
            timing.recurrence_week_of_month,
            timing.recurrence_weekday,
        )
        return FirstOccurrenceResult.failure(MONTHLY_NOT_FOUND_MESSAGE)

    start_iso, end_iso = resolved
    weekday = None
    week_of_month = None
    if interval in (RecurrenceInterval.WEEKLY, RecurrenceInterval.MONTHLY):
        weekday = timing.recurrence_weekday
    if interval == RecurrenceInterval.MONTHLY:
        week_of_month = timing.recurrence_week_of_month

    logger.debug("Resolved first %s occurrence: %s -> %s", interval.value, start_iso, end_iso)
    return FirstOccurrenceResult(
        success=True,
        start_iso=start_iso,
        end_iso=end_iso,
        is_recurring=True,
        recurrence_interval=interval,
        recurrence_weekday=weekday,
        recurrence_week_of_month=week_of_month,
    )
