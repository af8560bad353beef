# tests/test_dates.py

from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from daytasks.tasks.dates import (
    date_status,
    format_date,
    format_long_date,
    format_time,
    parse_date,
    parse_time,
)

from .conftest import TODAY


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("14:30", "2:30 PM"),
        ("09:05", "9:05 AM"),
        ("00:00", "12:00 AM"),
        ("12:00", "12:00 PM"),
        ("23:59", "11:59 PM"),
        ("", ""),
        (None, ""),
        ("25:00", ""),
        ("noon", ""),
    ],
)
def test_format_time(raw, expected) -> None:
    assert format_time(raw) == expected


def test_format_time_accepts_time_values() -> None:
    assert format_time(time(17, 0)) == "5:00 PM"


def test_date_status_yesterday_today_tomorrow() -> None:
    yesterday = date_status(TODAY - timedelta(days=1), TODAY)
    assert yesterday.is_overdue and not yesterday.is_due_today

    today = date_status(TODAY, TODAY)
    assert not today.is_overdue and today.is_due_today

    tomorrow = date_status(TODAY + timedelta(days=1), TODAY)
    assert not tomorrow.is_overdue and not tomorrow.is_due_today


def test_date_status_without_due_date() -> None:
    status = date_status(None, TODAY)
    assert not status.is_overdue
    assert not status.is_due_today


def test_date_status_ignores_time_of_day() -> None:
    late_evening = datetime(2026, 10, 18, 23, 59)
    status = date_status(TODAY, late_evening)
    assert status.is_due_today
    assert not status.is_overdue


def test_parse_date_and_time_reject_garbage() -> None:
    assert parse_date("2026-10-18") == date(2026, 10, 18)
    assert parse_date("") is None
    assert parse_date("2026-02-30") is None
    assert parse_date("18/10/2026") is None
    assert parse_date("20261018") is None
    assert parse_date("2026-W42-7") is None
    assert parse_date(" 2026-10-18 ") == date(2026, 10, 18)

    assert parse_time("08:15") == time(8, 15)
    assert parse_time("8:15") == time(8, 15)
    assert parse_time("08:15:00") is None
    assert parse_time("ab:cd") is None


def test_display_formats_use_the_same_calendar_date() -> None:
    assert format_date(TODAY) == "10/18/2026"
    assert format_date(None) == ""
    assert format_long_date(TODAY) == "Sunday, October 18"
    assert format_long_date(date(2026, 10, 19)) == "Monday, October 19"
