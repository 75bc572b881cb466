# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the presentation side.

Command handlers depend on this Protocol instead of the concrete SQLite store,
so tests can swap in an in-memory repo.
"""

from pathlib import Path
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    @property
    def db_path(self) -> Path: ...

    def count_tasks(self) -> int: ...

    def add_task(
            self,
            title: str,
            *,
            description: str = "",
            due_at: float | None = None,
    ) -> Task: ...

    def get_task(self, task_id: int) -> Task: ...

    def list_tasks(self) -> list[Task]: ...

    def list_overdue(self, now_ts: float | None = None) -> list[Task]: ...

    def update_title(self, task_id: int, new_title: str) -> Task: ...

    def toggle_completed(self, task_id: int) -> Task: ...

    def update_details(
            self,
            task_id: int,
            *,
            description: str | None = None,
            due_at: float | None = None,
            clear_due: bool = False,
    ) -> Task: ...

    def delete_task(self, task_id: int) -> None: ...

    def close(self) -> None: ...
