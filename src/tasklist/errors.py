# src/tasklist/errors.py

"""
Error taxonomy for the task store.

Presentation code catches InvalidInputError / NotFoundError and shows a
failure message. StorageError means the database file itself is unusable.
"""

from __future__ import annotations


class TaskStoreError(Exception):
    """Base class for everything the task store raises."""


class InvalidInputError(TaskStoreError, ValueError):
    """A field value was empty or otherwise invalid."""


class NotFoundError(TaskStoreError, LookupError):
    """An operation referenced a task id that does not exist."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task #{task_id} not found")
        self.task_id = task_id


class StorageError(TaskStoreError):
    """The underlying SQLite file is unavailable, corrupt, or failed on I/O."""
