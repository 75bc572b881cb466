# src/tasklist/tasks/task_models.py

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(slots=True)
class Task:
    id: int
    title: str
    completed: bool
    created_at: float
    updated_at: float

    description: str = ""
    due_at: float | None = None

    def is_overdue(self, now_ts: float | None = None) -> bool:
        """True if the task has a deadline in the past and is still open."""
        if self.due_at is None or self.completed:
            return False
        if now_ts is None:
            now_ts = time.time()
        return now_ts > self.due_at

    def __str__(self) -> str:
        return self.title + (" (Done)" if self.completed else "")
