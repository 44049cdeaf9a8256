# tests/conftest.py

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.controller import TaskListController
from tasklist.core.ports import TaskRepo
from tasklist.core.state import AppState
from tasklist.tasks.json_store import JSONTaskStore
from tasklist.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="WARNING",
        storage_backend="sqlite",
        data_dir=data_dir,
        tasks_db_path=data_dir / "tasks.sqlite3",
        tasks_json_path=data_dir / "tasks.json",
        confirm_delete=True,
    )


@pytest.fixture(params=["sqlite", "json"])
def open_store(request, tmp_path: Path) -> Callable[[], TaskRepo]:
    """
    Factory that opens a store of one backend type at a fixed path.

    Calling it twice gives two independent instances over the same medium,
    which is how the tests simulate a process restart.
    """
    if request.param == "sqlite":
        return lambda: TaskStore(tmp_path / "tasks.sqlite3")
    return lambda: JSONTaskStore(tmp_path / "tasks.json")


@pytest.fixture()
def task_store(open_store: Callable[[], TaskRepo]) -> TaskRepo:
    return open_store()


@pytest.fixture()
def state(settings: SimpleNamespace, task_store: TaskRepo) -> AppState:
    """AppState wired with a real store (both backends via the param)."""
    controller = TaskListController(task_store)
    controller.load()
    return AppState(settings=settings, task_store=task_store, controller=controller)
