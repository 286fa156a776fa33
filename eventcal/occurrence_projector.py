"""Projection of a recurrence rule onto concrete future occurrences."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from dateutil.relativedelta import relativedelta
from dateutil.rrule import DAILY, MONTHLY, WEEKLY, rrule

from .datetime_utils import rrule_weekday, weekday_index
from .exceptions import RecurrenceRuleError
from .models import (
    LAST_WEEK_OF_MONTH,
    AnchorTime,
    Occurrence,
    RecurrenceInterval,
    RecurrenceRule,
)
from .nth_weekday import week_of_month_for

logger = logging.getLogger(__name__)

DEFAULT_OCCURRENCE_COUNT = 5
MONTHLY_LOOKAHEAD_MONTHS = 24


@dataclass
class ProjectorConfig:
    """Configuration for occurrence projection."""

    occurrence_count: int = DEFAULT_OCCURRENCE_COUNT
    monthly_lookahead_months: int = MONTHLY_LOOKAHEAD_MONTHS

    @classmethod
    def from_settings(cls, settings: Any) -> ProjectorConfig:
        """Extract projection settings from a config object, keeping defaults for missing keys."""
        return cls(
            occurrence_count=getattr(settings, "occurrence_count", DEFAULT_OCCURRENCE_COUNT),
            monthly_lookahead_months=getattr(
                settings, "monthly_lookahead_months", MONTHLY_LOOKAHEAD_MONTHS
            ),
        )


def target_weekday(rule: RecurrenceRule, anchor: AnchorTime) -> int:
    """Rule weekday, defaulting to the anchor's own weekday."""
    if rule.weekday is not None:
        return rule.weekday
    if anchor.reference_date is None:
        raise RecurrenceRuleError(
            f"{rule.interval.value} rule has no weekday and the anchor has no reference date"
        )
    return weekday_index(anchor.reference_date)


def target_week_of_month(rule: RecurrenceRule, anchor: AnchorTime) -> int:
    """Rule ordinal week, defaulting to the anchor's own ordinal week."""
    if rule.week_of_month is not None:
        return rule.week_of_month
    if anchor.reference_date is None:
        raise RecurrenceRuleError(
            "monthly rule has no week_of_month and the anchor has no reference date"
        )
    return week_of_month_for(anchor.reference_date)


def _project_daily(
    anchor: AnchorTime,
    rule: RecurrenceRule,
    now: datetime.datetime,
    count: int,
    lookahead_months: int,
) -> list[Occurrence]:
    first = anchor.on(now.date())
    if first <= now:
        first += datetime.timedelta(days=1)
    starts = rrule(DAILY, dtstart=first, count=count)
    return [Occurrence.at(start, anchor.duration) for start in starts]


def _project_weekly(
    anchor: AnchorTime,
    rule: RecurrenceRule,
    now: datetime.datetime,
    count: int,
    lookahead_months: int,
) -> list[Occurrence]:
    weekday = target_weekday(rule, anchor)
    # Starting tomorrow pushes a same-weekday rule to next week
    dtstart = anchor.on(now.date() + datetime.timedelta(days=1))
    starts = rrule(WEEKLY, dtstart=dtstart, byweekday=rrule_weekday(weekday), count=count)
    logger.debug("Weekly projection: weekday=%d dtstart=%s", weekday, dtstart)
    return [Occurrence.at(start, anchor.duration) for start in starts]


def _project_monthly(
    anchor: AnchorTime,
    rule: RecurrenceRule,
    now: datetime.datetime,
    count: int,
    lookahead_months: int,
) -> list[Occurrence]:
    week_of_month = target_week_of_month(rule, anchor)
    weekday = target_weekday(rule, anchor)
    nth = -1 if week_of_month == LAST_WEEK_OF_MONTH else week_of_month

    month_start = now.date().replace(day=1)
    dtstart = anchor.on(month_start)
    # Last second of the final month in the lookahead window
    until = datetime.datetime.combine(
        month_start + relativedelta(months=lookahead_months), datetime.time.min
    ) - datetime.timedelta(seconds=1)

    starts = rrule(
        MONTHLY, dtstart=dtstart, byweekday=rrule_weekday(weekday, nth), until=until
    ).between(now, until, inc=True)
    out = [Occurrence.at(start, anchor.duration) for start in starts[:count]]

    if len(out) < count:
        logger.warning(
            "Monthly projection found %d of %d occurrences within %d months "
            "(week_of_month=%d, weekday=%d)",
            len(out),
            count,
            lookahead_months,
            week_of_month,
            weekday,
        )
    return out


_Projection = Callable[
    [AnchorTime, RecurrenceRule, datetime.datetime, int, int], list[Occurrence]
]

_PROJECTIONS: dict[RecurrenceInterval, _Projection] = {
    RecurrenceInterval.DAILY: _project_daily,
    RecurrenceInterval.WEEKLY: _project_weekly,
    RecurrenceInterval.MONTHLY: _project_monthly,
}


class OccurrenceProjector:
    """Projects recurrence rules onto the next few concrete occurrences."""

    def __init__(self, settings: Optional[Any] = None):
        """Initialize the projector.

        Args:
            settings: Optional object carrying ``occurrence_count`` and
                ``monthly_lookahead_months``; defaults apply for missing values
        """
        config = ProjectorConfig.from_settings(settings)
        self.default_count = config.occurrence_count
        self.lookahead_months = config.monthly_lookahead_months

    def project(
        self,
        anchor: AnchorTime,
        rule: RecurrenceRule,
        now: datetime.datetime,
        count: Optional[int] = None,
    ) -> list[Occurrence]:
        """Return up to ``count`` occurrences at or after ``now``, in order.

        Daily and weekly rules always yield exactly ``count`` entries. Monthly
        rules yield fewer when the lookahead window runs out; callers treat a
        short list as "no more occurrences computable".

        Raises:
            ValueError: If ``count`` is negative.
            RecurrenceRuleError: If a weekday/ordinal default cannot be derived.
        """
        if count is None:
            count = self.default_count
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        if count == 0:
            return []

        projection = _PROJECTIONS[rule.interval]
        occurrences = projection(anchor, rule, now, count, self.lookahead_months)
        logger.debug(
            "Projected %d %s occurrence(s) from %s", len(occurrences), rule.interval.value, now
        )
        return occurrences


def project_occurrences(
    anchor: AnchorTime,
    rule: RecurrenceRule,
    now: datetime.datetime,
    count: int = DEFAULT_OCCURRENCE_COUNT,
) -> list[Occurrence]:
    """Convenience wrapper around ``OccurrenceProjector().project``."""
    return OccurrenceProjector().project(anchor, rule, now, count)


def next_occurrences_for_event(
    start: datetime.datetime,
    end: Optional[datetime.datetime],
    rule: RecurrenceRule,
    now: datetime.datetime,
    count: int = DEFAULT_OCCURRENCE_COUNT,
) -> list[Occurrence]:
    """Next occurrences of a stored event, anchored on its persisted start/end.

    This is what the event detail view offers as RSVP dates.
    """
    return project_occurrences(AnchorTime.from_start(start, end), rule, now, count)
