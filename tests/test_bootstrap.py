# tests/test_bootstrap.py

from __future__ import annotations

import logging

import pytest

from tasklist.cli import main as cli_main
from tasklist.cli.bootstrap import create_initial_state, shutdown
from tasklist.errors import StorageError


def test_create_initial_state_opens_store(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        assert settings.db_path.exists()
        assert state.task_store.add_task("hello").id == 1
    finally:
        shutdown(state)

    with pytest.raises(StorageError):
        state.task_store.list_tasks()


def test_main_runs_console_and_closes_store(settings, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def fake_loop(state) -> None:
        state.task_store.add_task("from main")
        seen["store"] = state.task_store

    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "run_console_loop", fake_loop)

    try:
        assert cli_main.main() == 0
    finally:
        root = logging.getLogger()
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()

    assert (settings.log_dir / "todolist.log").exists()
    with pytest.raises(StorageError):
        seen["store"].count_tasks()


def test_data_dir_that_is_a_file_raises_storage_error(settings) -> None:
    settings.data_dir.parent.mkdir(parents=True, exist_ok=True)
    settings.data_dir.write_text("not a directory", "utf-8")

    with pytest.raises(StorageError):
        create_initial_state(settings=settings)


def test_main_returns_1_when_data_dir_unusable(settings, monkeypatch: pytest.MonkeyPatch) -> None:
    settings.data_dir.parent.mkdir(parents=True, exist_ok=True)
    settings.data_dir.write_text("not a directory", "utf-8")

    def unexpected_loop(state) -> None:
        raise AssertionError("console must not start without a store")

    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "run_console_loop", unexpected_loop)

    try:
        assert cli_main.main() == 1
    finally:
        root = logging.getLogger()
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()

    log_text = (settings.log_dir / "todolist.log").read_text("utf-8")
    assert "Cannot open task database" in log_text
