# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.state import AppState
from tasklist.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    A SimpleNamespace instead of the real config keeps tests away from the
    process environment and any local .env file.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        data_dir=data_dir,
        db_path=data_dir / "todos.sqlite3",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture()
def store(tmp_path: Path) -> Iterator[TaskStore]:
    s = TaskStore(tmp_path / "todos.sqlite3")
    yield s
    s.close()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState wired with a real SQLite store; its behaviour is what we test."""
    return AppState(settings=settings, task_store=store)
