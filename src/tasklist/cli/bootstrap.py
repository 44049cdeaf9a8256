# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the composition root:
- loads settings once,
- ensures local (gitignored) directories exist,
- constructs the one task store for the process and injects it into the
  controller and AppState.
"""

from __future__ import annotations

import logging

from ..cli.commands import friendly_store_error_message
from ..config import STORAGE_BACKENDS, get_settings
from ..core.controller import TaskListController
from ..core.ports import TaskRepo
from ..core.state import AppState
from ..errors import StorageReadError
from ..tasks.json_store import JSONTaskStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.tasks_json_path.parent.mkdir(parents=True, exist_ok=True)


def open_task_store(settings) -> TaskRepo:
    """
    Build the configured store.

    Raises ValueError for an unknown backend name and StorageReadError if the
    SQLite database cannot be opened.
    """
    backend = str(getattr(settings, "storage_backend", "sqlite")).strip().lower()

    if backend == "sqlite":
        return TaskStore(settings.tasks_db_path)
    if backend == "json":
        return JSONTaskStore(settings.tasks_json_path)

    raise ValueError(
        f"Unknown storage backend: {backend!r}. Expected one of {', '.join(STORAGE_BACKENDS)}."
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings and load the task list.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = open_task_store(settings)
    controller = TaskListController(store)

    # A store that cannot be read yet is not fatal: the list starts empty and
    # every later call re-reads the medium, so nothing gets overwritten.
    load_error: str | None = None
    try:
        controller.load()
    except StorageReadError as e:
        load_error = friendly_store_error_message(e)

    logger.info(
        "Task list ready backend=%s path=%s tasks=%d",
        store.backend_name,
        store.path,
        len(controller),
    )
    return AppState(
        settings=settings,
        task_store=store,
        controller=controller,
        load_error=load_error,
    )
