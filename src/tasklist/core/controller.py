# src/tasklist/core/controller.py

"""
Task list controller.

Holds the ordered, read-through cache of tasks that the console renders and
turns user gestures (add / edit row / delete row) into TaskRepo calls.

Cache rules:
- the cache is only ever rebuilt from values returned by the store;
- create appends, update replaces in place, delete removes; order is kept;
- on a store error the cache is left untouched and the error is re-raised,
  except TaskNotFoundError, which proves the row is stale and drops it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..errors import InvalidArgumentError, TaskNotFoundError, TaskStoreError
from ..tasks.task_models import Task, clean_title
from .ports import TaskRepo

logger = logging.getLogger(__name__)


class TaskListController:
    def __init__(self, store: TaskRepo) -> None:
        self._store = store
        self._tasks: list[Task] = []

    @property
    def tasks(self) -> Sequence[Task]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def titles(self) -> list[str]:
        return [t.title for t in self._tasks]

    def load(self) -> list[Task]:
        """Replace the cache with the store's current contents."""
        try:
            tasks = self._store.fetch_all()
        except TaskStoreError as e:
            logger.error("Failed to fetch tasks from %s store: %s", self._store.backend_name, e)
            raise
        self._tasks = list(tasks)
        logger.debug("Loaded %d tasks.", len(self._tasks))
        return list(self._tasks)

    def task_at(self, row: int) -> Task:
        """Return the task shown at 1-based `row`."""
        if not 1 <= row <= len(self._tasks):
            raise InvalidArgumentError(f"no task at row {row} (have {len(self._tasks)})")
        return self._tasks[row - 1]

    def _index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _drop(self, task_id: int) -> bool:
        idx = self._index_of(task_id)
        if idx is None:
            return False
        del self._tasks[idx]
        return True

    def _forget_stale(self, task_id: int) -> None:
        if self._drop(task_id):
            logger.warning("Task id=%s is gone from the store; dropped it from the list.", task_id)

    # ---- gestures ----

    def add(self, title: str) -> Task:
        title = clean_title(title)
        try:
            task = self._store.create(title)
        except TaskStoreError as e:
            logger.error("Create failed: %s", e)
            raise
        self._tasks.append(task)
        logger.info("Task added id=%s row=%d", task.id, len(self._tasks))
        return task

    def edit(self, row: int, title: str) -> Task:
        current = self.task_at(row)
        title = clean_title(title)
        try:
            task = self._store.update(current.id, title)
        except TaskNotFoundError:
            self._forget_stale(current.id)
            raise
        except TaskStoreError as e:
            logger.error("Update failed id=%s: %s", current.id, e)
            raise

        idx = self._index_of(task.id)
        if idx is not None:
            self._tasks[idx] = task
        logger.info("Task edited id=%s row=%d", task.id, row)
        return task

    def remove(self, row: int) -> Task:
        current = self.task_at(row)
        try:
            self._store.delete(current.id)
        except TaskNotFoundError:
            self._forget_stale(current.id)
            raise
        except TaskStoreError as e:
            logger.error("Delete failed id=%s: %s", current.id, e)
            raise

        self._drop(current.id)
        logger.info("Task deleted id=%s row=%d", current.id, row)
        return current
