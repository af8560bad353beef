# src/daytasks/tasks/task_store.py

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable

from ..core.ports import KeyValueStorage, TaskListener
from .task_models import Task

logger = logging.getLogger(__name__)

TASKS_KEY = "daytasks.tasks"


def _clock_ms() -> int:
    return int(time.time() * 1000)


def serialize_tasks(tasks: tuple[Task, ...] | list[Task]) -> str:
    return json.dumps([t.to_record() for t in tasks], ensure_ascii=False)


def deserialize_tasks(raw: str | None) -> list[Task]:
    """
    Decode the persisted array.

    Missing or malformed payloads yield an empty list; individual bad
    records are skipped.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Persisted tasks are not valid JSON; starting empty.")
        return []
    if not isinstance(data, list):
        logger.warning("Persisted tasks are not a JSON array; starting empty.")
        return []

    out: list[Task] = []
    seen: set[int] = set()
    for rec in data:
        task = Task.from_record(rec)
        if task is None or task.id in seen:
            logger.warning("Skipping malformed task record: %r", rec)
            continue
        seen.add(task.id)
        out.append(task)
    return out


class TaskStore:
    """
    Ordered task collection (newest first) mirrored to key-value storage.

    Persistence model:
    - the whole sequence is serialized under TASKS_KEY on every mutation
    - writes are synchronous; listeners run after the write completes
    - mutations addressed to an unknown id are no-ops (no write, no notify)

    Ids are millisecond-clock derived and strictly increasing, so they are
    never reused even after the newest task is deleted.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        clock_ms: Callable[[], int] = _clock_ms,
    ) -> None:
        self._storage = storage
        self._clock_ms = clock_ms
        self._tasks: list[Task] = []
        self._last_id = 0
        self._listeners: list[TaskListener] = []
        self.load()
        logger.info("TaskStore ready total=%s", len(self._tasks))

    # ---- low-level helpers ----

    def _index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _commit(self) -> None:
        self._storage.set_item(TASKS_KEY, serialize_tasks(self._tasks))
        snapshot = self.tasks()
        for listener in list(self._listeners):
            listener(snapshot)

    # ---- public API ----

    def load(self) -> list[Task]:
        """(Re)read the persisted sequence; malformed data loads as empty."""
        self._tasks = deserialize_tasks(self._storage.get_item(TASKS_KEY))
        if self._tasks:
            self._last_id = max(self._last_id, max(t.id for t in self._tasks))
        return list(self._tasks)

    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: int) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return isinstance(task_id, int) and self._index_of(task_id) is not None

    def next_id(self) -> int:
        nid = max(self._clock_ms(), self._last_id + 1)
        self._last_id = nid
        return nid

    def add(self, task: Task) -> None:
        if task.id in self:
            raise ValueError(f"duplicate task id {task.id}")
        self._last_id = max(self._last_id, task.id)
        self._tasks.insert(0, task)
        logger.debug("Task added id=%s priority=%s due=%s", task.id, task.priority, task.due_date)
        self._commit()

    def remove(self, task_id: int) -> bool:
        idx = self._index_of(task_id)
        if idx is None:
            return False
        del self._tasks[idx]
        logger.debug("Task removed id=%s", task_id)
        self._commit()
        return True

    def update(self, task_id: int, mutator: Callable[[Task], Task]) -> bool:
        """Replace the task in place with mutator(task); order and id are kept."""
        idx = self._index_of(task_id)
        if idx is None:
            return False
        updated = mutator(self._tasks[idx])
        if updated.id != task_id:
            raise ValueError("task id is immutable")
        self._tasks[idx] = updated
        logger.debug("Task updated id=%s", task_id)
        self._commit()
        return True

    def subscribe(self, listener: TaskListener) -> Callable[[], None]:
        """Register a change listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
