# src/daytasks/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date, datetime, time

from .dates import as_date, today as local_today
from .task_models import Category, Priority, Task
from .task_store import TaskStore
from .views import FOLDERS, Page, Selection, Views, derive_views, shift_month

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TaskDraft:
    """The new-task form. Cleared back to defaults after a successful create."""

    text: str = ""
    priority: Priority = Priority.MEDIUM
    category: Category = Category.PERSONAL
    due_date: date | None = None
    start_time: time | None = None
    end_time: time | None = None


def _coerce_priority(value: Priority | str | None) -> Priority:
    if value is None or value == "":
        return Priority.MEDIUM
    if isinstance(value, Priority):
        return value
    parsed = Priority.parse(value)
    if parsed is None:
        raise ValueError(f"unknown priority: {value!r}")
    return parsed


def _coerce_category(value: Category | str | None) -> Category:
    if value is None or value == "":
        return Category.PERSONAL
    if isinstance(value, Category):
        return value
    parsed = Category.parse(value)
    if parsed is None:
        raise ValueError(f"unknown category: {value!r}")
    return parsed


class TaskManager:
    """
    User intents against the task store plus the UI selection state.

    Mutations (create/delete/toggle/save_edit) go through TaskStore, which
    persists and notifies. Selection intents (folder/date/month/page/edit mode)
    only touch `selection`. Views are computed on demand by views().
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        today: Callable[[], date] = local_today,
    ) -> None:
        self.store = store
        self._today = today
        now = today()
        self.selection = Selection(selected_date=now, visible_month=now.replace(day=1))
        self.draft = TaskDraft()

    # ---- reads ----

    def views(self, today: date | None = None) -> Views:
        return derive_views(self.store.tasks(), self.selection, today or self._today())

    @property
    def editing_id(self) -> int | None:
        return self.selection.editing_id

    # ---- task mutations ----

    def create(
        self,
        text: str,
        *,
        priority: Priority | str | None = None,
        category: Category | str | None = None,
        due_date: date | None = None,
        start_time: time | None = None,
        end_time: time | None = None,
    ) -> Task | None:
        """
        Add a task at the front of the list.

        Blank text is ignored (returns None, nothing stored). Unknown
        priority/category strings raise ValueError before anything changes.
        """
        if not text or not text.strip():
            logger.debug("Ignoring create with blank text.")
            return None

        prio = _coerce_priority(priority)
        cat = _coerce_category(category)
        task = Task(
            id=self.store.next_id(),
            text=text.strip(),
            priority=prio,
            category=cat,
            due_date=as_date(due_date) if due_date is not None else None,
            start_time=start_time,
            end_time=end_time,
        )
        self.store.add(task)
        self.draft = TaskDraft()
        logger.info("Created task id=%s category=%s", task.id, task.category)
        return task

    def create_from_draft(self) -> Task | None:
        d = self.draft
        return self.create(
            d.text,
            priority=d.priority,
            category=d.category,
            due_date=d.due_date,
            start_time=d.start_time,
            end_time=d.end_time,
        )

    def delete(self, task_id: int) -> bool:
        removed = self.store.remove(task_id)
        if removed and self.selection.editing_id == task_id:
            self.cancel_edit()
        return removed

    def toggle_complete(self, task_id: int) -> bool:
        return self.store.update(task_id, lambda t: replace(t, completed=not t.completed))

    # ---- edit mode (one task at a time) ----

    def start_edit(self, task_id: int) -> bool:
        task = self.store.get(task_id)
        if task is None:
            return False
        self.selection.editing_id = task.id
        self.selection.editing_text = task.text
        return True

    def save_edit(self, text: str | None = None) -> bool:
        """
        Apply the draft (or `text`) to the task being edited and leave edit mode.

        Blank drafts end edit mode without touching the task.
        """
        task_id = self.selection.editing_id
        if task_id is None:
            return False
        new_text = self.selection.editing_text if text is None else text
        self.cancel_edit()
        if not new_text.strip():
            return False
        return self.store.update(task_id, lambda t: replace(t, text=new_text.strip()))

    def cancel_edit(self) -> None:
        self.selection.editing_id = None
        self.selection.editing_text = ""

    # ---- selection intents ----

    def select_folder(self, name: str) -> None:
        """Pick a folder ("All" or a category) and switch to the home page."""
        folder = name
        if name not in FOLDERS:
            cat = Category.parse(name)
            if cat is None and name.strip().lower() != "all":
                raise ValueError(f"unknown folder: {name!r}")
            folder = cat.value if cat is not None else FOLDERS[0]
        self.selection.folder = folder
        self.selection.page = Page.HOME

    def select_date(self, day: date | datetime) -> None:
        self.selection.selected_date = as_date(day)

    def navigate_month(self, delta: int) -> date:
        self.selection.visible_month = shift_month(self.selection.visible_month, delta)
        return self.selection.visible_month

    def navigate_page(self, page: Page | str) -> None:
        self.selection.page = Page(page)
