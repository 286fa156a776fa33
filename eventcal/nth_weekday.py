"""Ordinal weekday-in-month resolution ("2nd Tuesday", "last Friday")."""

from __future__ import annotations

import datetime
import logging
from typing import Optional

from dateutil.relativedelta import relativedelta

from .datetime_utils import rrule_weekday
from .exceptions import RecurrenceRuleError
from .models import (
    LAST_WEEK_OF_MONTH,
    WEEK_OF_MONTH_MAX,
    WEEK_OF_MONTH_MIN,
    WEEKDAY_MAX,
    WEEKDAY_MIN,
)

logger = logging.getLogger(__name__)


def _check_args(month: int, week_of_month: int, weekday: int) -> None:
    if not 1 <= month <= 12:
        raise RecurrenceRuleError(f"month must be 1..12, got {month}")
    if not WEEK_OF_MONTH_MIN <= week_of_month <= WEEK_OF_MONTH_MAX:
        raise RecurrenceRuleError(f"week_of_month must be 1..5, got {week_of_month}")
    if not WEEKDAY_MIN <= weekday <= WEEKDAY_MAX:
        raise RecurrenceRuleError(f"weekday must be 0..6, got {weekday}")


def resolve_nth_weekday(
    year: int, month: int, week_of_month: int, weekday: int
) -> Optional[datetime.date]:
    """Return the ``week_of_month``-th ``weekday`` of the month.

    Args:
        year: Calendar year
        month: Month 1..12
        week_of_month: 1..4 for the n-th occurrence, 5 for the last one
        weekday: 0 (Sunday) .. 6 (Saturday)

    Returns:
        The matching date, or None when the month has fewer than
        ``week_of_month`` occurrences of ``weekday`` (never for 5).

    Raises:
        RecurrenceRuleError: If any argument is out of range.
    """
    _check_args(month, week_of_month, weekday)
    first_of_month = datetime.date(year, month, 1)

    if week_of_month == LAST_WEEK_OF_MONTH:
        # day=31 clamps to the month's last day, then walks back to the weekday
        return first_of_month + relativedelta(day=31, weekday=rrule_weekday(weekday, -1))

    day = first_of_month + relativedelta(weekday=rrule_weekday(weekday, week_of_month))
    if day.month != month:
        logger.debug(
            "No occurrence #%d of weekday %d in %04d-%02d", week_of_month, weekday, year, month
        )
        return None
    return day


def week_of_month_for(day: datetime.date) -> int:
    """Ordinal week of ``day``'s weekday within its month.

    Returns 1..4 for the first through fourth occurrence, including a fourth
    occurrence that happens to be the month's last. Only a fifth occurrence
    maps to 5 ("last"), since no ordinal 1..4 can describe it.
    """
    ordinal = (day.day - 1) // 7 + 1
    if ordinal <= 4:
        return ordinal
    return LAST_WEEK_OF_MONTH
