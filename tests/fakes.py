# tests/fakes.py

from __future__ import annotations

from tasklist.errors import StorageError


class BrokenTaskRepo:
    """
    TaskRepo whose every call fails like an unreadable database file.

    Used to check that storage failures are not swallowed by handlers.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __getattr__(self, name: str):
        def _fail(*args, **kwargs):
            self.calls.append(name)
            raise StorageError(f"{name} failed: disk I/O error")

        return _fail
