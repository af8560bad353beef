# src/daytasks/tasks/views.py

from __future__ import annotations

"""
Derived task views.

Everything here is a pure function of (task snapshot, selection, today).
Nothing is cached: callers recompute after every store change.

Views:
- todays_schedule: tasks due today, by priority then start time
- folder_tasks: the "All" sentinel or a single category, store order kept
- day_membership: distinct due dates (calendar dots)
- tasks_for_day: tasks due on the selected calendar date
- month_grid: Sunday-first month layout for the calendar page
"""

import calendar
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from enum import StrEnum

from .dates import MONTH_NAMES, as_date
from .task_models import Category, Task

ALL_FOLDER = "All"
FOLDERS: tuple[str, ...] = (ALL_FOLDER, *(c.value for c in Category))


class Page(StrEnum):
    HOME = "home"
    CALENDAR = "calendar"


@dataclass(slots=True)
class Selection:
    """UI selection state shared by every view; owned by the TaskManager."""

    page: Page = Page.HOME
    folder: str = ALL_FOLDER
    selected_date: date = field(default_factory=date.today)
    visible_month: date = field(default_factory=lambda: date.today().replace(day=1))
    editing_id: int | None = None
    editing_text: str = ""


def _schedule_key(task: Task) -> tuple[int, bool, time]:
    return (task.priority.rank, task.start_time is None, task.start_time or time.min)


def todays_schedule(tasks: Iterable[Task], today: date) -> list[Task]:
    """
    Tasks due today.

    Order: priority rank, then tasks with a start time (earliest first),
    then tasks without one. sorted() is stable, so remaining ties keep
    store order.
    """
    due_today = [t for t in tasks if t.due_date is not None and t.due_date == today]
    return sorted(due_today, key=_schedule_key)


def folder_tasks(tasks: Iterable[Task], folder: str | Category) -> list[Task]:
    if folder == ALL_FOLDER:
        return list(tasks)
    return [t for t in tasks if t.category == folder]


def day_membership(tasks: Iterable[Task]) -> frozenset[date]:
    return frozenset(t.due_date for t in tasks if t.due_date is not None)


def tasks_for_day(tasks: Iterable[Task], day: date | datetime) -> list[Task]:
    target = as_date(day)
    return [
        t
        for t in tasks
        if t.due_date is not None
        and (t.due_date.year, t.due_date.month, t.due_date.day)
        == (target.year, target.month, target.day)
    ]


@dataclass(frozen=True, slots=True)
class CalendarDay:
    day: date
    has_tasks: bool
    is_today: bool
    is_selected: bool


@dataclass(frozen=True, slots=True)
class MonthGrid:
    year: int
    month: int
    leading_blanks: int
    days: tuple[CalendarDay, ...]

    @property
    def title(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    def weeks(self) -> Iterator[list[CalendarDay | None]]:
        """Rows of 7 cells, Sunday first; None marks padding outside the month."""
        cells: list[CalendarDay | None] = [None] * self.leading_blanks + list(self.days)
        if len(cells) % 7:
            cells.extend([None] * (7 - len(cells) % 7))
        for i in range(0, len(cells), 7):
            yield cells[i : i + 7]


def month_grid(
    year: int,
    month: int,
    tasks: Iterable[Task],
    today: date,
    selected: date | None = None,
) -> MonthGrid:
    marked = day_membership(tasks)
    first_weekday, days_in_month = calendar.monthrange(year, month)
    leading = (first_weekday + 1) % 7  # monthrange is Monday-based

    days = []
    for d in range(1, days_in_month + 1):
        day = date(year, month, d)
        days.append(
            CalendarDay(
                day=day,
                has_tasks=day in marked,
                is_today=day == today,
                is_selected=selected is not None and day == selected,
            )
        )
    return MonthGrid(year=year, month=month, leading_blanks=leading, days=tuple(days))


def shift_month(first_of_month: date, delta: int) -> date:
    index = first_of_month.year * 12 + (first_of_month.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


@dataclass(frozen=True, slots=True)
class Views:
    today: date
    schedule: list[Task]
    folder: list[Task]
    membership: frozenset[date]
    selected_day: list[Task]
    grid: MonthGrid
    selection: Selection


def derive_views(tasks: Iterable[Task], selection: Selection, today: date) -> Views:
    snapshot = tuple(tasks)
    month = selection.visible_month
    return Views(
        today=today,
        schedule=todays_schedule(snapshot, today),
        folder=folder_tasks(snapshot, selection.folder),
        membership=day_membership(snapshot),
        selected_day=tasks_for_day(snapshot, selection.selected_date),
        grid=month_grid(month.year, month.month, snapshot, today, selection.selected_date),
        selection=replace(selection),
    )
