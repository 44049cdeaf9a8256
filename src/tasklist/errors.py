# src/tasklist/errors.py

"""
Typed errors raised by task stores and the list controller.

Every store operation either returns or raises one of these. Low-level causes
(sqlite3.Error, OSError, JSONDecodeError) are chained via `raise ... from exc`.
"""

from __future__ import annotations


class TaskStoreError(Exception):
    """Base class for all task storage failures."""


class InvalidArgumentError(TaskStoreError, ValueError):
    """Empty / whitespace-only / non-string title, or a bad row number."""


class TaskNotFoundError(TaskStoreError, LookupError):
    """No task with the given id exists in the store."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class StorageReadError(TaskStoreError):
    """The storage medium could not be read (missing device, corruption, ...)."""


class StorageWriteError(TaskStoreError):
    """A change could not be persisted; the store is left as it was."""
