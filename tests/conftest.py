"""Shared fixtures for eventcal tests."""

import datetime
from collections.abc import Generator
from typing import Any

import pytest

from eventcal.datetime_utils import Clock, fixed_clock
from eventcal.models import CalendarEventSummary, EventType

EVENTCAL_ENV_VARS = [
    "EVENTCAL_TEST_TIME",
    "EVENTCAL_DEBUG",
    "EVENTCAL_LOG_LEVEL",
    "EVENTCAL_OCCURRENCE_COUNT",
    "EVENTCAL_LOOKAHEAD_MONTHS",
    "EVENTCAL_MAX_EVENTS_PER_CELL",
]


def pytest_configure(config: Any) -> None:
    """Register test markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "critical_path: Core functionality tests")


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Clear eventcal environment overrides so host settings never leak into tests."""
    for name in EVENTCAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def clock() -> Clock:
    """Clock frozen at Monday 2025-03-10 10:00 local wall clock."""
    return fixed_clock(datetime.datetime(2025, 3, 10, 10, 0))


@pytest.fixture
def monday_morning(clock: Clock) -> datetime.datetime:
    """Current time according to the frozen clock."""
    return clock()


@pytest.fixture
def make_event():
    """Factory for calendar event rows."""

    def _make(
        event_id: str,
        day: datetime.date,
        event_type: EventType = EventType.REGULAR,
        is_recurring: bool = False,
        category_name: str = None,
    ) -> CalendarEventSummary:
        return CalendarEventSummary(
            id=event_id,
            title=f"Event {event_id}",
            date=day,
            event_type=event_type,
            is_recurring=is_recurring,
            category_name=category_name,
        )

    return _make
