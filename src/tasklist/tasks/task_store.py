# src/tasklist/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterator
from pathlib import Path

from ..errors import (
    StorageReadError,
    StorageWriteError,
    TaskNotFoundError,
    TaskStoreError,
)
from .task_models import Task, check_task_id, clean_title

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The schema is simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Identity is the INTEGER PRIMARY KEY (AUTOINCREMENT, so ids of deleted rows
    are never handed out again). Rows come back in id order, i.e. insertion order.

    Each method opens its own SQLite connection and closes it before returning.
    """

    backend_name = "sqlite"

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageReadError(f"cannot create directory for {self._db_path}: {exc}") from exc
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except TaskStoreError:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    @property
    def path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Shutdown hook (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _session(
        self, error_cls: type[TaskStoreError], action: str
    ) -> Iterator[sqlite3.Connection]:
        """
        Open a connection, translate sqlite3 failures into `error_cls`.

        Uncommitted changes are rolled back on any exception, so a failed
        write leaves the table exactly as it was.
        """
        try:
            conn = self._get_conn()
        except sqlite3.Error as exc:
            raise error_cls(f"cannot open {self._db_path}: {exc}") from exc
        try:
            yield conn
        except sqlite3.Error as exc:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            logger.error("TaskStore %s failed db=%s: %s", action, self._db_path, exc)
            raise error_cls(f"{action} failed: {exc}") from exc
        except BaseException:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._session(StorageReadError, "schema setup") as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    created_at REAL NOT NULL DEFAULT 0,
                    updated_at REAL NOT NULL DEFAULT 0
                )
                """
            )

            # Older databases only had (id, title).
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            conn.commit()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
        )

    @staticmethod
    def _select_one(conn: sqlite3.Connection, task_id: int) -> sqlite3.Row | None:
        cur = conn.execute(
            "SELECT id, title, created_at, updated_at FROM tasks WHERE id = ?",
            (task_id,),
        )
        return cur.fetchone()

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._session(StorageReadError, "count") as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def fetch_all(self) -> list[Task]:
        with self._session(StorageReadError, "fetch_all") as conn:
            cur = conn.execute(
                "SELECT id, title, created_at, updated_at FROM tasks ORDER BY id ASC"
            )
            return [self._row_to_task(r) for r in cur.fetchall()]

    def get(self, task_id: int) -> Task:
        task_id = check_task_id(task_id)
        with self._session(StorageReadError, "get") as conn:
            row = self._select_one(conn, task_id)
        if row is None:
            raise TaskNotFoundError(task_id)
        return self._row_to_task(row)

    def create(self, title: str) -> Task:
        title = clean_title(title)
        now = time.time()

        with self._session(StorageWriteError, "create") as conn:
            cur = conn.execute(
                "INSERT INTO tasks(title, created_at, updated_at) VALUES (?, ?, ?)",
                (title, now, now),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageWriteError("SQLite did not return lastrowid for tasks insert")

        task = Task(id=int(rowid), title=title, created_at=now, updated_at=now)
        logger.debug("Task created id=%s", task.id)
        return task

    def update(self, task_id: int, title: str) -> Task:
        task_id = check_task_id(task_id)
        title = clean_title(title)
        now = time.time()

        with self._session(StorageWriteError, "update") as conn:
            row = self._select_one(conn, task_id)
            if row is None:
                raise TaskNotFoundError(task_id)
            conn.execute(
                "UPDATE tasks SET title = ?, updated_at = ? WHERE id = ?",
                (title, now, task_id),
            )
            conn.commit()

        task = Task(
            id=int(row["id"]),
            title=title,
            created_at=float(row["created_at"] or 0.0),
            updated_at=now,
        )
        logger.debug("Task updated id=%s", task.id)
        return task

    def delete(self, task_id: int) -> None:
        task_id = check_task_id(task_id)
        with self._session(StorageWriteError, "delete") as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            if cur.rowcount != 1:
                raise TaskNotFoundError(task_id)
            conn.commit()
        logger.debug("Task deleted id=%s", task_id)
