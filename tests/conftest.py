# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from daytasks.core.state import AppState
from daytasks.storage.local_storage import LocalStorage
from daytasks.tasks.task_api import TaskManager
from daytasks.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeStorage

# A Sunday; October 2026 starts on a Thursday.
TODAY = date(2026, 10, 18)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="daytasks-test",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path / "data",
        storage_path=tmp_path / "data" / "local_storage.json",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def store(fake_storage: FakeStorage, clock: FakeClock) -> TaskStore:
    return TaskStore(fake_storage, clock_ms=clock)


@pytest.fixture()
def manager(store: TaskStore) -> TaskManager:
    return TaskManager(store, today=lambda: TODAY)


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock) -> AppState:
    """
    AppState wired with a fixed date and clock.

    NOTE: We keep the real file-backed LocalStorage here because the
    persistence round-trip is part of what we want to test.
    """
    storage = LocalStorage(settings.storage_path)
    store = TaskStore(storage, clock_ms=clock)
    return AppState(
        settings=settings,
        storage=storage,
        store=store,
        manager=TaskManager(store, today=lambda: TODAY),
    )
