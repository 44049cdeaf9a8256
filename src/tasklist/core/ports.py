# src/tasklist/core/ports.py

"""
Ports (interfaces) used by the core.

The controller depends on these Protocols instead of concrete implementations,
so the SQLite and JSON stores stay swappable and tests can pass fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """Durable CRUD over task records. Failures raise tasklist.errors types."""

    backend_name: str

    @property
    def path(self) -> Path: ...

    def fetch_all(self) -> list[Task]: ...
    def get(self, task_id: int) -> Task: ...
    def create(self, title: str) -> Task: ...
    def update(self, task_id: int, title: str) -> Task: ...
    def delete(self, task_id: int) -> None: ...
    def count_tasks(self) -> int: ...
    def close(self) -> None: ...


class Prompter(Protocol):
    """
    Connector-side port: how commands ask the user for input.

    The console connector implements it with input(); tests use a scripted fake.
    """

    def ask(self, message: str, default: str = "") -> str: ...
    def confirm(self, message: str) -> bool: ...
