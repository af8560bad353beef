# src/daytasks/cli/render.py

"""
Plain-text rendering of the derived views.

Task lines are numbered by their position in the store (1 = newest), the
same number every command accepts, so numbers stay stable across pages.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from ..tasks.dates import date_status, format_date, format_long_date, format_time
from ..tasks.task_models import Task
from ..tasks.views import ALL_FOLDER, CalendarDay, Page, Views

WEEK_HEADER = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")


def time_window(task: Task) -> str:
    start = format_time(task.start_time)
    end = format_time(task.end_time)
    if start and end:
        return f"{start} - {end}"
    return start or end or "All Day"


def render_task(task: Task, position: int, today: date, editing: tuple[int | None, str]) -> str:
    editing_id, draft = editing
    mark = "[x]" if task.completed else "[ ]"
    if task.id == editing_id:
        return f"{position:>3}. {mark} (editing) {draft}"

    parts = [f"{position:>3}. {mark} {task.text}", f"[{task.priority}]", f"#{task.category}"]
    if task.due_date is not None:
        status = date_status(task.due_date, today)
        due = f"due {format_date(task.due_date)}"
        if status.is_overdue and not task.completed:
            due += " (overdue)"
        elif status.is_due_today:
            due += " (today)"
        parts.append(due)
    if task.start_time or task.end_time:
        parts.append(time_window(task))
    return "  ".join(parts)


def _render_list(tasks: Sequence[Task], views: Views, positions: dict[int, int], empty: str) -> list[str]:
    if not tasks:
        return [f"  {empty}"]
    editing = (views.selection.editing_id, views.selection.editing_text)
    return [render_task(t, positions[t.id], views.today, editing) for t in tasks]


def render_home(views: Views, positions: dict[int, int]) -> str:
    folder = views.selection.folder
    lines = [f"Today's Schedule ({format_long_date(views.today)})"]
    schedule = views.schedule
    if schedule:
        for t in schedule:
            mark = "[x]" if t.completed else "[ ]"
            lines.append(f"  {time_window(t):<19} {positions[t.id]:>3}. {mark} {t.text}  [{t.priority}]  #{t.category}")
    else:
        lines.append("  Nothing scheduled for today.")
    lines.append("")
    lines.append(f"{folder} Tasks")
    empty = "No tasks." if folder == ALL_FOLDER else f"No tasks in {folder}."
    lines.extend(_render_list(views.folder, views, positions, empty))
    return "\n".join(lines)


def _cell(day: CalendarDay | None) -> str:
    if day is None:
        return " " * 5
    left, right = " ", " "
    if day.is_selected:
        left, right = "[", "]"
    elif day.is_today:
        left, right = "<", ">"
    dot = "*" if day.has_tasks else " "
    return f"{left}{day.day.day:>2}{right}{dot}"


def render_calendar(views: Views, positions: dict[int, int]) -> str:
    grid = views.grid
    lines = [grid.title.center(7 * 5), "".join(f" {d}  " for d in WEEK_HEADER)]
    for week in grid.weeks():
        lines.append("".join(_cell(d) for d in week).rstrip())
    lines.append("  [n] selected  <n> today  * has tasks")
    lines.append("")
    lines.append(f"Tasks for {format_long_date(views.selection.selected_date)}")
    lines.extend(_render_list(views.selected_day, views, positions, "No tasks for this day."))
    return "\n".join(lines)


def render_page(views: Views, tasks: Sequence[Task]) -> str:
    positions = {t.id: i for i, t in enumerate(tasks, start=1)}
    if views.selection.page == Page.CALENDAR:
        return render_calendar(views, positions)
    return render_home(views, positions)
