# src/tasklist/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import math
import sqlite3
import time
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from ..errors import InvalidInputError, NotFoundError, StorageError
from .task_models import Task

logger = logging.getLogger(__name__)


def _clean_title(title: str | None) -> str:
    if title is None or not str(title).strip():
        raise InvalidInputError("title must not be empty")
    return str(title).strip()


def _clean_id(task_id: object) -> int:
    # bool is an int subclass; True must not address task #1.
    if isinstance(task_id, bool):
        raise InvalidInputError(f"task id must be an integer, got {task_id!r}")
    if isinstance(task_id, int):
        return task_id
    if isinstance(task_id, str) and task_id.strip().isdecimal():
        return int(task_id.strip())
    raise InvalidInputError(f"task id must be an integer, got {task_id!r}")


def _clean_due(due_at: object) -> float:
    if isinstance(due_at, bool) or not isinstance(due_at, (int, float)):
        raise InvalidInputError(f"due date must be a Unix timestamp, got {due_at!r}")
    value = float(due_at)
    if not math.isfinite(value):
        raise InvalidInputError(f"due date must be finite, got {due_at!r}")
    return value


class TaskStore:
    """
    SQLite task store.

    The schema is simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Connection lifetime:
    - one connection, opened in the constructor and released by close()
    - every mutation commits before returning
    """

    def __init__(self, db_path: str | Path = "todos.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"cannot create directory for {self._db_path}: {e}") from e

        with self._sql("open"):
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        self._conn = conn

        try:
            self._ensure_schema()
        except StorageError:
            self.close()
            raise

        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        try:
            conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"failed to close {self._db_path}: {e}") from e
        logger.debug("TaskStore closed db=%s", self._db_path)

    def __enter__(self) -> TaskStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---- low-level helpers ----

    @contextlib.contextmanager
    def _sql(self, what: str) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as e:
            raise StorageError(f"{what} failed on {self._db_path}: {e}") from e

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError(f"TaskStore for {self._db_path} is closed")
        return self._conn

    @contextlib.contextmanager
    def _write(self, what: str) -> Iterator[sqlite3.Cursor]:
        """Cursor inside a transaction: commit on success, roll back on any error."""
        conn = self._get_conn()
        with self._sql(what):
            cur = conn.cursor()
            try:
                yield cur
            except BaseException:
                conn.rollback()
                raise
            conn.commit()

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        with self._write("schema init") as cur:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    completed INTEGER NOT NULL DEFAULT 0,
                    due_at REAL,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("description", "TEXT NOT NULL DEFAULT ''")
            add_col("completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("due_at", "REAL")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_open_due ON tasks(completed, due_at)")

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"]),
            completed=bool(row["completed"]),
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
            description=str(row["description"] or ""),
            due_at=float(row["due_at"]) if row["due_at"] is not None else None,
        )

    def _fetch(self, task_id: int) -> Task:
        task_id = _clean_id(task_id)
        conn = self._get_conn()
        with self._sql("get task"):
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if row is None:
            raise NotFoundError(task_id)
        return self._row_to_task(row)

    def _query(self, what: str, sql: str, params: tuple[Any, ...] = ()) -> list[Task]:
        conn = self._get_conn()
        with self._sql(what):
            rows = conn.execute(sql, params).fetchall()
        return [self._row_to_task(r) for r in rows]

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        with self._sql("count tasks"):
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
        return int(n)

    def add_task(
        self,
        title: str,
        *,
        description: str = "",
        due_at: float | None = None,
    ) -> Task:
        clean = _clean_title(title)
        now = time.time()

        with self._write("add task") as cur:
            cur.execute(
                """
                INSERT INTO tasks(title, description, completed, due_at, created_at, updated_at)
                VALUES (?, ?, 0, ?, ?, ?)
                """,
                (
                    clean,
                    (description or "").strip(),
                    _clean_due(due_at) if due_at is not None else None,
                    now,
                    now,
                ),
            )
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageError("SQLite did not return lastrowid for tasks insert")

        task_id = int(rowid)
        logger.debug("Task added id=%s title=%r due_at=%s", task_id, clean, due_at)
        return self._fetch(task_id)

    def get_task(self, task_id: int) -> Task:
        return self._fetch(task_id)

    def list_tasks(self) -> list[Task]:
        """All tasks in insertion order."""
        return self._query("list tasks", "SELECT * FROM tasks ORDER BY id ASC")

    def list_overdue(self, now_ts: float | None = None) -> list[Task]:
        """Open tasks whose due date has passed, earliest deadline first."""
        if now_ts is None:
            now_ts = time.time()
        return self._query(
            "list overdue",
            """
            SELECT *
            FROM tasks
            WHERE completed = 0
              AND due_at IS NOT NULL
              AND due_at < ?
            ORDER BY due_at ASC, id ASC
            """,
            (float(now_ts),),
        )

    def update_title(self, task_id: int, new_title: str) -> Task:
        clean = _clean_title(new_title)
        task_id = _clean_id(task_id)
        with self._write("update title") as cur:
            cur.execute(
                "UPDATE tasks SET title = ?, updated_at = ? WHERE id = ?",
                (clean, time.time(), task_id),
            )
            if cur.rowcount == 0:
                raise NotFoundError(task_id)
        logger.debug("Task renamed id=%s title=%r", task_id, clean)
        return self._fetch(task_id)

    def toggle_completed(self, task_id: int) -> Task:
        task_id = _clean_id(task_id)
        with self._write("toggle completed") as cur:
            cur.execute(
                """
                UPDATE tasks
                SET completed = CASE completed WHEN 0 THEN 1 ELSE 0 END,
                    updated_at = ?
                WHERE id = ?
                """,
                (time.time(), task_id),
            )
            if cur.rowcount == 0:
                raise NotFoundError(task_id)
        task = self._fetch(task_id)
        logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)
        return task

    def update_details(
        self,
        task_id: int,
        *,
        description: str | None = None,
        due_at: float | None = None,
        clear_due: bool = False,
    ) -> Task:
        """
        Edit the supplementary fields.

        description=None and due_at=None leave the stored values alone;
        clear_due=True removes the deadline.
        """
        task_id = _clean_id(task_id)
        fields: list[str] = []
        params: list[Any] = []

        if description is not None:
            fields.append("description = ?")
            params.append(description.strip())

        if clear_due:
            fields.append("due_at = NULL")
        elif due_at is not None:
            fields.append("due_at = ?")
            params.append(_clean_due(due_at))

        if not fields:
            return self._fetch(task_id)

        fields.append("updated_at = ?")
        params.append(time.time())
        params.append(task_id)

        sql = f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?"
        with self._write("update details") as cur:
            cur.execute(sql, params)
            if cur.rowcount == 0:
                raise NotFoundError(task_id)
        logger.debug("Task details updated id=%s", task_id)
        return self._fetch(task_id)

    def delete_task(self, task_id: int) -> None:
        task_id = _clean_id(task_id)
        with self._write("delete task") as cur:
            cur.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            if cur.rowcount == 0:
                raise NotFoundError(task_id)
        logger.debug("Task deleted id=%s", task_id)
