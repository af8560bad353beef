# src/daytasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage -> task store -> task manager into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.local_storage import LocalStorage
from ..tasks.task_api import TaskManager
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = LocalStorage(settings.storage_path)
    store = TaskStore(storage)
    state = AppState(
        settings=settings,
        storage=storage,
        store=store,
        manager=TaskManager(store),
    )
    logger.debug("State created storage=%s tasks=%d", settings.storage_path, len(store))
    return state
