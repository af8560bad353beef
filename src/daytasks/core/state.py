# src/daytasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_api import TaskManager
from ..tasks.task_store import TaskStore
from .ports import KeyValueStorage


@dataclass
class AppState:
    # Settings object (config.Settings in the app, SimpleNamespace in tests).
    settings: Any

    storage: KeyValueStorage
    store: TaskStore
    manager: TaskManager
