# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ports import TaskRepo


@dataclass
class AppState:
    # Settings are kept on the state so handlers can read paths/app name.
    settings: Any
    task_store: TaskRepo
