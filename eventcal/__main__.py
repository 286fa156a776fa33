"""Command-line entry for eventcal.

Prints projected occurrences, first-occurrence resolutions and calendar
windows as JSON, which is handy when checking a rule against a given "now".
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import timedelta
from typing import Any, Optional

from .calendar_window import (
    build_window,
    can_go_next,
    current_option_value,
    quick_jump_options,
    window_title,
)
from .config_loader import load_config
from .datetime_utils import (
    Clock,
    fixed_clock,
    local_now,
    parse_form_date,
    parse_local_datetime,
    parse_time_of_day,
    to_local_iso,
)
from .event_placer import CalendarEventPlacer
from .exceptions import EventCalError
from .first_occurrence import resolve_first_occurrence
from .logging_config import configure_logging
from .models import (
    AnchorTime,
    CalendarEventSummary,
    EventTimingInput,
    RecurrenceInterval,
    RecurrenceRule,
)
from .occurrence_projector import OccurrenceProjector

logger = logging.getLogger(__name__)

INTERVAL_CHOICES = [interval.value for interval in RecurrenceInterval]


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the eventcal CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="eventcal",
        description="eventcal - recurrence and calendar window tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m eventcal occurrences --interval weekly --weekday 1 --time 09:00
  python -m eventcal first --interval monthly --week-of-month 5 --weekday 5 --time 19:00
  python -m eventcal window --anchor 2025-01-01
        """,
    )
    parser.add_argument("--now", help="ISO date-time used as 'now' (default: local clock)")
    parser.add_argument(
        "--config", metavar="PATH", help="YAML config file (default: ./eventcal.yaml)"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    occ = sub.add_parser("occurrences", help="List the next occurrences of a rule")
    occ.add_argument("--interval", choices=INTERVAL_CHOICES, required=True)
    occ.add_argument("--time", required=True, help="Anchor time of day, HH:MM")
    occ.add_argument("--weekday", type=int, help="0 (Sunday) .. 6 (Saturday)")
    occ.add_argument("--week-of-month", type=int, help="1..4, or 5 for last")
    occ.add_argument("--start", help="Persisted event start (ISO); supplies rule defaults")
    occ.add_argument("--duration-minutes", type=int, help="Occurrence length")
    occ.add_argument("--count", type=int, help="Number of occurrences (default from config)")

    first = sub.add_parser("first", help="Resolve the first start/end for a new event")
    first.add_argument("--interval", choices=INTERVAL_CHOICES)
    first.add_argument("--date", help="Start date for daily events, MM/DD/YYYY")
    first.add_argument("--weekday", type=int)
    first.add_argument("--week-of-month", type=int)
    first.add_argument("--time", help="Start time of day, HH:MM")
    first.add_argument("--end-time", help="End time of day, HH:MM")
    first.add_argument("--start", help="Start date-time for one-off events (ISO)")
    first.add_argument("--end", help="End date-time for one-off events (ISO)")

    win = sub.add_parser("window", help="Show the 35-day calendar window")
    win.add_argument("--anchor", help="Any date inside the first week (default: today)")
    win.add_argument("--events", metavar="PATH", help="JSON list of event rows to place")

    return parser


def _cmd_occurrences(args: argparse.Namespace, now: Any, config: Any) -> dict[str, Any]:
    hour, minute = parse_time_of_day(args.time)
    reference = parse_local_datetime(args.start).date() if args.start else None
    duration = None
    if args.duration_minutes is not None:
        duration = timedelta(minutes=args.duration_minutes)
    anchor = AnchorTime(hour=hour, minute=minute, reference_date=reference, duration=duration)
    rule = RecurrenceRule(
        interval=RecurrenceInterval(args.interval),
        weekday=args.weekday,
        week_of_month=args.week_of_month,
    )
    projector = OccurrenceProjector(config)
    occurrences = projector.project(anchor, rule, now, args.count)
    return {
        "now": to_local_iso(now),
        "occurrences": [
            {"start": occ.start_iso, "end": occ.end_iso, "label": occ.label}
            for occ in occurrences
        ],
    }


def _cmd_first(args: argparse.Namespace, now: Any, config: Any) -> dict[str, Any]:
    timing = EventTimingInput(
        repeat_interval=args.interval,
        recurrence_start_date=args.date,
        recurrence_weekday=args.weekday,
        recurrence_week_of_month=args.week_of_month,
        start_time_time=args.time,
        end_time_time=args.end_time,
        start_time=args.start,
        end_time=args.end,
    )
    result = resolve_first_occurrence(timing, now, config.monthly_lookahead_months)
    if not result.success:
        return {"success": False, "error": result.error_message}
    return {"success": True, **result.to_persistence_payload()}


def _load_events(path: str) -> list[CalendarEventSummary]:
    with open(path, encoding="utf-8") as f:
        rows = json.load(f)
    if not isinstance(rows, list):
        raise ValueError(f"{path} must contain a JSON list of events")
    return [CalendarEventSummary.model_validate(row) for row in rows]


def _cmd_window(args: argparse.Namespace, now: Any, config: Any) -> dict[str, Any]:
    today = now.date()
    anchor = parse_form_date(args.anchor) if args.anchor else today
    window = build_window(anchor)
    output: dict[str, Any] = {
        "title": window_title(window),
        "start_date": window.start_date.isoformat(),
        "days": [day.isoformat() for day in window.days],
        "selected_option": current_option_value(window.start_date, today),
        "can_go_next": can_go_next(window.start_date, today),
        "options": [
            {"value": opt.value, "label": opt.label, "start_date": opt.start_date.isoformat()}
            for opt in quick_jump_options(today)
        ],
    }

    if args.events:
        placer = CalendarEventPlacer(config.max_events_per_cell)
        cells = placer.place_events(window, _load_events(args.events), today)
        output["cells"] = [
            {
                "date": cell.date.isoformat(),
                "events": [ev.id for ev in cell.events],
                "is_today": cell.is_today,
                "is_out_of_month": cell.is_out_of_month,
            }
            for cell in cells
        ]
    return output


_COMMANDS = {
    "occurrences": _cmd_occurrences,
    "first": _cmd_first,
    "window": _cmd_window,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Run the eventcal CLI and return the process exit code."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    # Handler first so config warnings are formatted; level from config after
    configure_logging(debug_mode=args.debug)

    try:
        config = load_config(args.config)
        configure_logging(config.log_level, debug_mode=args.debug)
        clock: Clock = fixed_clock(parse_local_datetime(args.now)) if args.now else local_now
        output = _COMMANDS[args.command](args, clock(), config)
    except (EventCalError, ValueError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"eventcal: error: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(output, indent=2, ensure_ascii=False))
    if output.get("success") is False:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
