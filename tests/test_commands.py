# tests/test_commands.py

from __future__ import annotations

from datetime import date, time

import pytest

from daytasks.cli.commands import CommandRegistry, parse_add_args, parse_day, registry, resolve_task_id
from daytasks.connectors.console_connector import handle_line
from daytasks.core.state import AppState
from daytasks.storage.local_storage import LocalStorage
from daytasks.tasks.task_api import TaskDraft
from daytasks.tasks.task_models import Category, Priority, Task
from daytasks.tasks.task_store import TaskStore

from .conftest import TODAY


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_parse_add_args() -> None:
    opts = parse_add_args("Write report p=high c=work due=2026-10-20 start=09:00 end=10:30 x=y")
    assert opts == {
        "text": "Write report x=y",
        "priority": Priority.HIGH,
        "category": Category.WORK,
        "due_date": date(2026, 10, 20),
        "start_time": time(9, 0),
        "end_time": time(10, 30),
    }

    with pytest.raises(ValueError):
        parse_add_args("x p=urgent")
    with pytest.raises(ValueError):
        parse_add_args("x due=someday")
    with pytest.raises(ValueError):
        parse_add_args("x start=9am")


def test_parse_day_keywords() -> None:
    assert parse_day("today", TODAY) == TODAY
    assert parse_day("Tomorrow", TODAY) == date(2026, 10, 19)
    assert parse_day("yesterday", TODAY) == date(2026, 10, 17)
    assert parse_day("2026-12-25", TODAY) == date(2026, 12, 25)
    assert parse_day("xmas", TODAY) is None


def test_add_done_rm_flow(state: AppState) -> None:
    assert registry.handle(state, "/add Pay rent p=high c=personal due=2026-10-18") == "Added: Pay rent"
    assert registry.handle(state, "/add    ") == "Task text required."
    assert len(state.store) == 1

    task = state.store.tasks()[0]
    assert resolve_task_id(state, "1") == task.id
    assert resolve_task_id(state, str(task.id)) == task.id
    assert resolve_task_id(state, "2") is None
    assert resolve_task_id(state, "abc") is None

    assert registry.handle(state, "/done 1") == "Completed: Pay rent"
    assert state.store.get(task.id).completed is True
    assert registry.handle(state, "/x 1") == "Reopened: Pay rent"

    assert registry.handle(state, "/rm 7") == "No task 7."
    assert registry.handle(state, "/rm 1") == "Removed: Pay rent"
    assert len(state.store) == 0


def test_tasks_persist_to_local_storage(state: AppState, settings) -> None:
    registry.handle(state, "/add Water plants c=daily")

    reloaded = TaskStore(LocalStorage(settings.storage_path))
    assert [t.text for t in reloaded.tasks()] == ["Water plants"]
    assert reloaded.tasks()[0].category is Category.DAILY_GOALS


def test_edit_via_console_lines(state: AppState) -> None:
    handle_line(state, "Read a book")
    emitted: list[str] = []

    assert "Editing" in registry.handle(state, "/edit 1", emit=emitted.append)
    assert emitted == ["Current text: Read a book"]

    # Plain text while editing becomes the new text.
    assert handle_line(state, "Read two books") == "Saved."
    assert state.store.tasks()[0].text == "Read two books"

    assert registry.handle(state, "/save") == "Nothing is being edited. Use /edit <n> first."
    registry.handle(state, "/edit 1")
    assert registry.handle(state, "/cancel") == "Edit cancelled."
    assert state.store.tasks()[0].text == "Read two books"


def test_pages_render_views(state: AppState) -> None:
    registry.handle(state, "/add Standup p=high c=work due=2026-10-18 start=09:00 end=09:15")
    registry.handle(state, "/add Someday maybe")

    home = registry.handle(state, "/home")
    assert "Today's Schedule (Sunday, October 18)" in home
    assert "9:00 AM - 9:15 AM" in home
    assert "All Tasks" in home

    work = registry.handle(state, "/folder work")
    assert "Work Tasks" in work
    assert "Standup" in work
    assert "Someday maybe" not in work
    assert "Unknown folder" in registry.handle(state, "/folder errands")

    cal = registry.handle(state, "/day 2026-10-18")
    assert "October 2026" in cal
    assert "[18]*" in cal
    assert "Tasks for Sunday, October 18" in cal
    assert "Standup" in cal

    nxt = registry.handle(state, "/next")
    assert "November 2026" in nxt
    assert "October 2026" in registry.handle(state, "/prev")


def test_parse_add_args_keeps_text_spacing() -> None:
    opts = parse_add_args("Call  Bob\tp=high about   rent c=work")
    assert opts["text"] == "Call  Bob about   rent"
    assert opts["priority"] is Priority.HIGH
    assert opts["category"] is Category.WORK

    # Words that only contain an option name are text.
    assert parse_add_args("stop=now  please") == {"text": "stop=now  please"}


def test_console_text_is_stored_as_typed(state: AppState) -> None:
    assert handle_line(state, "Call  Bob\tabout   rent") == "Added: Call  Bob\tabout   rent"
    assert state.store.tasks()[0].text == "Call  Bob\tabout   rent"

    registry.handle(state, "/add   Pay   bills  p=low")
    assert state.store.tasks()[0].text == "Pay   bills"

    registry.handle(state, "/edit 1")
    assert handle_line(state, "new   text") == "Saved."
    assert state.store.tasks()[0].text == "new   text"

    registry.handle(state, "/edit 2")
    assert registry.handle(state, "/save  two\tspaced  words ") == "Saved."
    assert state.store.tasks()[1].text == "two\tspaced  words"


def test_add_goes_through_the_draft(state: AppState) -> None:
    state.manager.draft = TaskDraft(text="stale", priority=Priority.LOW)
    assert registry.handle(state, "/add Plan trip c=personal due=2026-10-19") == "Added: Plan trip"

    task = state.store.tasks()[0]
    assert task.priority is Priority.MEDIUM
    assert task.due_date == date(2026, 10, 19)
    assert state.manager.draft == TaskDraft()

    assert "Unknown priority" in registry.handle(state, "/add Oops p=urgent")
    assert len(state.store) == 1


def test_list_number_wins_over_matching_id(state: AppState) -> None:
    state.store.add(Task(id=2, text="older"))
    state.store.add(Task(id=1, text="newer"))
    state.store.add(Task(id=500, text="newest"))

    # Position 1 is the newest task, even though a task has id 1.
    assert resolve_task_id(state, "1") == 500
    assert resolve_task_id(state, "2") == 1
    assert resolve_task_id(state, "500") == 500

    assert registry.handle(state, "/done 1") == "Completed: newest"
    assert state.store.get(1).completed is False
