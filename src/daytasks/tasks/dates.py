# src/daytasks/tasks/dates.py

from __future__ import annotations

"""
Date/time helpers.

All task dates are plain calendar dates (datetime.date, no time, no zone).
The same value drives overdue logic and display, so the two can never
disagree about which day a task is due.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, time

MONTH_NAMES = tuple(calendar.month_name[1:])
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


@dataclass(frozen=True, slots=True)
class DateStatus:
    is_overdue: bool
    is_due_today: bool


def today() -> date:
    """Current date in the local calendar."""
    return datetime.now().date()


def as_date(value: date | datetime) -> date:
    """Reduce a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(raw: str | None) -> date | None:
    """'YYYY-MM-DD' -> date. Empty or malformed input -> None."""
    if not raw:
        return None
    raw = raw.strip()
    if not _DATE_RE.fullmatch(raw):
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def parse_time(raw: str | None) -> time | None:
    """'HH:MM' (24-hour) -> time. Empty or malformed input -> None."""
    if not raw:
        return None
    parts = raw.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return None
    try:
        return time(int(parts[0]), int(parts[1]))
    except ValueError:
        return None


def date_to_str(value: date | None) -> str:
    return value.isoformat() if value else ""


def time_to_str(value: time | None) -> str:
    return value.strftime("%H:%M") if value else ""


def format_time(value: str | time | None) -> str:
    """
    24-hour 'HH:MM' (or a time) -> '2:30 PM'.

    Empty input returns '' so the caller can show its own placeholder ("All Day").
    """
    t = parse_time(value) if isinstance(value, str) else value
    if t is None:
        return ""
    hour12 = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{hour12}:{t.minute:02d} {suffix}"


def format_date(value: date | None) -> str:
    """Short display form, e.g. '10/18/2026'."""
    if value is None:
        return ""
    return f"{value.month}/{value.day}/{value.year}"


def format_long_date(value: date) -> str:
    """Heading form, e.g. 'Sunday, October 18'."""
    weekday = WEEKDAY_NAMES[(value.weekday() + 1) % 7]
    return f"{weekday}, {MONTH_NAMES[value.month - 1]} {value.day}"


def date_status(due_date: date | None, today_: date | None = None) -> DateStatus:
    """Classify a due date against today at day granularity."""
    if due_date is None:
        return DateStatus(is_overdue=False, is_due_today=False)
    ref = as_date(today_) if today_ is not None else today()
    due = as_date(due_date)
    return DateStatus(is_overdue=due < ref, is_due_today=due == ref)
