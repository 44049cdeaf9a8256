# src/tasklist/tasks/json_store.py

"""JSON file-based task store.

All tasks live in a single JSON document:

    {"version": 1, "next_id": 4, "tasks": [{"id": 1, "title": "...", ...}, ...]}

Every mutation re-reads the file, applies the change and writes the whole
document to a temp file in the same directory before atomically moving it over
the target file (temp file + os.replace). A failed write therefore never leaves a
half-written document behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import StorageReadError, StorageWriteError, TaskNotFoundError
from .task_models import Task, check_task_id, clean_title

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


@dataclass(slots=True)
class _Document:
    next_id: int = 1
    # Insertion-ordered index: dicts keep the order tasks were added in.
    tasks: dict[int, Task] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        return {
            "version": FORMAT_VERSION,
            "next_id": self.next_id,
            "tasks": [t.to_dict() for t in self.tasks.values()],
        }


class JSONTaskStore:
    """JSON file-based task store.

    Attributes:
        path: The Path to the JSON document.

    Example:
        store = JSONTaskStore(Path(".local/tasklist/tasks.json"))
        task = store.create("Buy milk")
        store.update(task.id, "Buy oat milk")
    """

    backend_name = "json"

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        logger.info("JSONTaskStore ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def close(self) -> None:
        """Shutdown hook (files are closed after every call)."""
        return

    # ---- low-level helpers ----

    def _load(self) -> _Document:
        """Read the document from disk.

        A missing file is an empty store. Anything that cannot be parsed is
        reported as StorageReadError; starting fresh here would wipe the
        user's tasks on the next write.
        """
        if not self._path.exists():
            return _Document()

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StorageReadError(f"{self._path} is corrupted: {exc}") from exc
        except OSError as exc:
            raise StorageReadError(f"cannot read {self._path}: {exc}") from exc

        if not isinstance(raw, dict) or not isinstance(raw.get("tasks"), list):
            raise StorageReadError(f"{self._path} is not a task list document")

        doc = _Document()
        try:
            for item in raw["tasks"]:
                task = Task.from_dict(item)
                if task.id in doc.tasks:
                    raise StorageReadError(f"{self._path} has duplicate task id {task.id}")
                doc.tasks[task.id] = task
            highest = max(doc.tasks, default=0)
            doc.next_id = max(int(raw.get("next_id") or 1), highest + 1)
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageReadError(f"{self._path} has a malformed task entry: {exc}") from exc
        return doc

    def _save(self, doc: _Document) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        except OSError as exc:
            raise StorageWriteError(f"cannot write {self._path}: {exc}") from exc

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(doc.to_json(), f, ensure_ascii=False, indent=2)
            os.replace(temp_path, self._path)
        except (OSError, TypeError, ValueError) as exc:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            logger.error("JSONTaskStore write failed path=%s: %s", self._path, exc)
            raise StorageWriteError(f"cannot write {self._path}: {exc}") from exc

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._load().tasks)

    def fetch_all(self) -> list[Task]:
        return list(self._load().tasks.values())

    def get(self, task_id: int) -> Task:
        task_id = check_task_id(task_id)
        task = self._load().tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def create(self, title: str) -> Task:
        title = clean_title(title)
        doc = self._load()

        now = time.time()
        task = Task(id=doc.next_id, title=title, created_at=now, updated_at=now)
        doc.tasks[task.id] = task
        doc.next_id += 1

        self._save(doc)
        logger.debug("Task created id=%s", task.id)
        return task

    def update(self, task_id: int, title: str) -> Task:
        task_id = check_task_id(task_id)
        title = clean_title(title)
        doc = self._load()

        current = doc.tasks.get(task_id)
        if current is None:
            raise TaskNotFoundError(task_id)

        task = Task(
            id=current.id,
            title=title,
            created_at=current.created_at,
            updated_at=time.time(),
        )
        doc.tasks[task.id] = task

        self._save(doc)
        logger.debug("Task updated id=%s", task.id)
        return task

    def delete(self, task_id: int) -> None:
        task_id = check_task_id(task_id)
        doc = self._load()
        if doc.tasks.pop(task_id, None) is None:
            raise TaskNotFoundError(task_id)

        self._save(doc)
        logger.debug("Task deleted id=%s", task_id)
