# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    created_at: float
    updated_at: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        return cls(
            id=int(raw["id"]),
            title=clean_title(raw["title"]),
            created_at=float(raw.get("created_at") or 0.0),
            updated_at=float(raw.get("updated_at") or 0.0),
        )


def clean_title(title: object) -> str:
    """
    Validate a user-supplied title and return it stripped.

    Raises InvalidArgumentError for non-strings and empty / whitespace-only text.
    """
    if not isinstance(title, str):
        raise InvalidArgumentError(f"title must be a string, got {type(title).__name__}")
    cleaned = title.strip()
    if not cleaned:
        raise InvalidArgumentError("title is required")
    return cleaned


def check_task_id(task_id: object) -> int:
    """Return `task_id` if it is a usable task identity, else InvalidArgumentError."""
    if isinstance(task_id, bool) or not isinstance(task_id, int):
        raise InvalidArgumentError(f"task id must be an integer, got {task_id!r}")
    return task_id
