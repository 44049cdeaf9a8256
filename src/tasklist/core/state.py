# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .controller import TaskListController
from .ports import TaskRepo


@dataclass
class AppState:
    # Settings live on the state so commands don't reach for module globals.
    settings: Any

    task_store: TaskRepo
    controller: TaskListController

    # Set when the initial load failed; the console shows it and /reload retries.
    load_error: str | None = None
