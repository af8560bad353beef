# src/daytasks/cli/commands.py

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Callable
from datetime import date, timedelta
from typing import cast

from ..core.state import AppState
from ..tasks.dates import parse_date, parse_time, today
from ..tasks.task_api import TaskDraft
from ..tasks.task_models import Category, Priority
from ..tasks.views import FOLDERS, Page
from .render import render_page

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._raw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw: bool = False,
    ) -> None:
        """
        raw=True handlers get the argument text unsplit, as a single item
        (empty list when there is none), so spacing inside it survives.
        """
        aliases = aliases or []
        keys = [name.lower(), *(a.lower() for a in aliases)]
        for key in keys:
            self._handlers[key] = handler
            if raw:
                self._raw.add(key)
        self._help[keys[0]] = help_text

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""
        if name in self._raw:
            args = [rest] if rest.strip() else []
        else:
            args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def resolve_task_id(state: AppState, raw: str) -> int | None:
    """
    Accept a list number (1 = newest) or a task id.

    List numbers win: a number within the list length always means a
    position, even if some stored task has that id.
    """
    raw = raw.strip().rstrip(".")
    if not raw.isdigit():
        return None
    value = int(raw)
    tasks = state.store.tasks()
    if 1 <= value <= len(tasks):
        return tasks[value - 1].id
    if value in state.store:
        return value
    return None


def parse_day(raw: str, ref: date | None = None) -> date | None:
    """'YYYY-MM-DD', 'today', 'tomorrow' or 'yesterday'."""
    ref = ref or today()
    key = raw.strip().lower()
    offsets = {"today": 0, "tomorrow": 1, "yesterday": -1}
    if key in offsets:
        return ref + timedelta(days=offsets[key])
    return parse_date(key)


_ADD_OPTION_RE = re.compile(r"(?:^|\s+)(p|priority|c|category|due|start|end)=(\S*)", re.IGNORECASE)


def parse_add_args(raw: str) -> dict:
    """
    Split '/add' argument text into task text and key=value options.

    Options: p=/priority=, c=/category=, due=, start=, end=.
    Category values may use '-' or '_' for spaces (c=daily-goals).
    Only recognised options are cut out; the rest of the text is kept as typed.
    Raises ValueError for unknown option values.
    """
    opts: dict = {}
    for m in _ADD_OPTION_RE.finditer(raw):
        key, value = m.group(1).lower(), m.group(2)
        if key in ("p", "priority"):
            prio = Priority.parse(value)
            if prio is None:
                raise ValueError(f"Unknown priority: {value}. Use high, medium or low.")
            opts["priority"] = prio
        elif key in ("c", "category"):
            cat = Category.parse(value)
            if cat is None:
                raise ValueError(f"Unknown category: {value}. Use one of: {', '.join(FOLDERS[1:])}.")
            opts["category"] = cat
        elif key == "due":
            due = parse_day(value)
            if due is None:
                raise ValueError(f"Bad date: {value}. Use YYYY-MM-DD or today/tomorrow.")
            opts["due_date"] = due
        elif key in ("start", "end"):
            t = parse_time(value)
            if t is None:
                raise ValueError(f"Bad time: {value}. Use HH:MM (24-hour).")
            opts[f"{key}_time"] = t
    opts["text"] = _ADD_OPTION_RE.sub("", raw)
    return opts


def _page(state: AppState) -> str:
    return render_page(state.manager.views(), state.store.tasks())


# ---- command handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_home(state: AppState, args: list[str]) -> str:
    state.manager.navigate_page(Page.HOME)
    return _page(state)


def cmd_calendar(state: AppState, args: list[str]) -> str:
    state.manager.navigate_page(Page.CALENDAR)
    return _page(state)


def cmd_folder(state: AppState, args: list[str]) -> str:
    """
    /folder            -> list folders
    /folder <name>     -> show one folder (All, Personal, Work, Daily Goals, ...)
    """
    if not args:
        current = state.manager.selection.folder
        return "Folders:\n" + "\n".join(
            f"  {'*' if f == current else ' '} {f}" for f in FOLDERS
        )
    try:
        state.manager.select_folder(" ".join(args))
    except ValueError:
        return f"Unknown folder: {' '.join(args)}. Use one of: {', '.join(FOLDERS)}."
    return _page(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <text> [p=high] [c=work] [due=YYYY-MM-DD] [start=HH:MM] [end=HH:MM]"""
    try:
        opts = parse_add_args(args[0] if args else "")
    except ValueError as e:
        return str(e)
    state.manager.draft = TaskDraft(**opts)
    task = state.manager.create_from_draft()
    if task is None:
        return "Task text required."
    return f"Added: {task.text}"


def _with_task(state: AppState, args: list[str], usage: str) -> int | str:
    if len(args) != 1:
        return usage
    task_id = resolve_task_id(state, args[0])
    if task_id is None:
        return f"No task {args[0]}."
    return task_id


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _with_task(state, args, "Usage: /done <n>")
    if isinstance(task_id, str):
        return task_id
    state.manager.toggle_complete(task_id)
    task = state.store.get(task_id)
    return f"{'Completed' if task and task.completed else 'Reopened'}: {task.text if task else task_id}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    task_id = _with_task(state, args, "Usage: /rm <n>")
    if isinstance(task_id, str):
        return task_id
    task = state.store.get(task_id)
    state.manager.delete(task_id)
    return f"Removed: {task.text if task else task_id}"


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit <n>          -> enter edit mode for one task (shows current text)
    /save [new text]   -> apply
    /cancel            -> discard
    """
    task_id = _with_task(state, args, "Usage: /edit <n>")
    if isinstance(task_id, str):
        return task_id
    state.manager.start_edit(task_id)
    if emit:
        emit(f"Current text: {state.manager.selection.editing_text}")
    return "Editing. Type the new text, or /save <text>, or /cancel."


def cmd_save(state: AppState, args: list[str]) -> str:
    if state.manager.editing_id is None:
        return "Nothing is being edited. Use /edit <n> first."
    text = args[0] if args else None
    if state.manager.save_edit(text):
        return "Saved."
    return "Edit ended; task unchanged."


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if state.manager.editing_id is None:
        return "Nothing is being edited."
    state.manager.cancel_edit()
    return "Edit cancelled."


def cmd_day(state: AppState, args: list[str]) -> str:
    """/day <YYYY-MM-DD|today|tomorrow>: select a calendar day (and show its month)."""
    if len(args) != 1:
        return "Usage: /day <YYYY-MM-DD|today|tomorrow|yesterday>"
    day = parse_day(args[0])
    if day is None:
        return f"Bad date: {args[0]}. Use YYYY-MM-DD."
    m = state.manager
    m.select_date(day)
    m.selection.visible_month = day.replace(day=1)
    m.navigate_page(Page.CALENDAR)
    return _page(state)


def _shift(state: AppState, delta: int) -> str:
    state.manager.navigate_month(delta)
    state.manager.navigate_page(Page.CALENDAR)
    return _page(state)


def cmd_next(state: AppState, args: list[str]) -> str:
    return _shift(state, 1)


def cmd_prev(state: AppState, args: list[str]) -> str:
    return _shift(state, -1)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("home", cmd_home, help_text="Today's schedule and the current folder.", aliases=["ls"])
registry.register("calendar", cmd_calendar, help_text="Month calendar and tasks for the selected day.", aliases=["cal"])
registry.register("folder", cmd_folder, help_text="List folders or show one: /folder work.", aliases=["f"])
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add text [p=high] [c=work] [due=2026-10-18] [start=09:00] [end=10:00].",
    aliases=["a"],
    raw=True,
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["x"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["del"])
registry.register("edit", cmd_edit, help_text="Edit a task's text: /edit <n>.", aliases=["e"])
registry.register("save", cmd_save, help_text="Save the edit: /save [new text].", raw=True)
registry.register("cancel", cmd_cancel, help_text="Discard the edit.")
registry.register("day", cmd_day, help_text="Select a calendar day: /day 2026-10-18 | today.")
registry.register("next", cmd_next, help_text="Next month.")
registry.register("prev", cmd_prev, help_text="Previous month.")
