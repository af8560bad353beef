# src/daytasks/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from enum import StrEnum
from typing import Any

from .dates import date_to_str, parse_date, parse_time, time_to_str


class Priority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Sort rank: High first."""
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, raw: str | None) -> Priority | None:
        """Case-insensitive match on value or name ('high', 'HIGH', 'h')."""
        if not raw:
            return None
        key = raw.strip().lower()
        for p in cls:
            if key in (p.value.lower(), p.value[0].lower()):
                return p
        return None

    @classmethod
    def from_db(cls, raw: str | None) -> Priority:
        try:
            return cls(raw)
        except ValueError:
            return cls.MEDIUM


_PRIORITY_RANK = {Priority.HIGH: 1, Priority.MEDIUM: 2, Priority.LOW: 3}


class Category(StrEnum):
    PERSONAL = "Personal"
    WORK = "Work"
    DAILY_GOALS = "Daily Goals"
    WEEKLY_GOALS = "Weekly Goals"
    MONTHLY_GOALS = "Monthly Goals"

    @classmethod
    def parse(cls, raw: str | None) -> Category | None:
        """Case-insensitive match; '-', '_' and spaces are interchangeable ('daily-goals')."""
        if not raw:
            return None
        key = raw.strip().lower().replace("-", " ").replace("_", " ")
        for c in cls:
            if key in (c.value.lower(), c.value.split()[0].lower()):
                return c
        return None

    @classmethod
    def from_db(cls, raw: str | None) -> Category:
        try:
            return cls(raw)
        except ValueError:
            return cls.PERSONAL


@dataclass(slots=True)
class Task:
    id: int
    text: str
    priority: Priority = Priority.MEDIUM
    category: Category = Category.PERSONAL
    due_date: date | None = None
    start_time: time | None = None
    end_time: time | None = None
    completed: bool = False

    def to_record(self) -> dict[str, Any]:
        """Persisted shape: camelCase keys, '' for absent date/time."""
        return {
            "id": self.id,
            "text": self.text,
            "priority": self.priority.value,
            "category": self.category.value,
            "dueDate": date_to_str(self.due_date),
            "startTime": time_to_str(self.start_time),
            "endTime": time_to_str(self.end_time),
            "completed": self.completed,
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task | None:
        """
        Decode one persisted record.

        Returns None for records without an integer id or a string text.
        Unknown priority/category fall back to defaults; bad dates/times decode as absent.
        """
        if not isinstance(raw, dict):
            return None
        tid = raw.get("id")
        text = raw.get("text")
        if isinstance(tid, bool) or not isinstance(tid, int) or not isinstance(text, str):
            return None

        def _str(key: str) -> str | None:
            v = raw.get(key)
            return v if isinstance(v, str) else None

        return cls(
            id=tid,
            text=text,
            priority=Priority.from_db(_str("priority")),
            category=Category.from_db(_str("category")),
            due_date=parse_date(_str("dueDate")),
            start_time=parse_time(_str("startTime")),
            end_time=parse_time(_str("endTime")),
            completed=raw.get("completed") is True,
        )
