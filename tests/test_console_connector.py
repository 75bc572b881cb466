# tests/test_console_connector.py

from __future__ import annotations

import builtins

import pytest

from tasklist.connectors.console_connector import run_console_loop
from tasklist.core.state import AppState

from .fakes import BrokenTaskRepo


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


def test_console_runs_commands_until_exit(
    state: AppState, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _feed(monkeypatch, ["/add Buy milk", "", "Walk dog", "/done 1", "/exit", "/add never"])

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Added [ ] #1 Buy milk" in out
    assert "Added [ ] #2 Walk dog" in out
    assert "Completed [x] #1 Buy milk" in out
    assert [t.title for t in state.task_store.list_tasks()] == ["Buy milk", "Walk dog"]


def test_console_stops_on_eof(state: AppState, monkeypatch: pytest.MonkeyPatch) -> None:
    _feed(monkeypatch, ["/add only"])
    run_console_loop(state)
    assert state.task_store.count_tasks() == 1


def test_console_survives_storage_error(
    settings, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    repo = BrokenTaskRepo()
    broken = AppState(settings=settings, task_store=repo)
    _feed(monkeypatch, ["/list", "/add x"])

    run_console_loop(broken)

    out = capsys.readouterr().out
    assert out.count("Internal error while handling a command") == 2
    assert repo.calls == ["list_tasks", "add_task"]
