"""Exception hierarchy for eventcal.

Resolution failures the user can fix (a monthly rule with no occurrence in
the lookahead window, malformed form input) are reported through
``FirstOccurrenceResult`` rather than raised. The exceptions below cover
programming and configuration errors, plus the internal parse failure that
the resolver turns into a result.
"""


class EventCalError(Exception):
    """Base exception for all eventcal errors."""


class RecurrenceRuleError(EventCalError):
    """Recurrence parameters are invalid or cannot be defaulted.

    Raised when:
    - A weekday is outside 0..6 or a month outside 1..12
    - An ordinal week-of-month is outside 1..5
    - A weekly/monthly rule omits its weekday and the anchor has no
      reference date to default from
    """


class TimingInputError(EventCalError):
    """A date or time string from the event form could not be parsed.

    Raised by the parsing helpers in ``datetime_utils``; the first-occurrence
    resolver catches it and returns a failed result with a user-facing message.
    """


class ConfigError(EventCalError):
    """Configuration file exists but does not hold a mapping."""
