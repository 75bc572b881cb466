# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the composition root:
- ensures local (gitignored) directories exist,
- opens the task store,
- wires both into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..errors import StorageError
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    # The store creates the parent of db_path itself.
    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"cannot create data directory {settings.data_dir}: {e}") from e


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings(). The caller owns the
    returned store and must close it (see shutdown()).
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(
        settings=settings,
        task_store=TaskStore(settings.db_path),
    )


def shutdown(state: AppState) -> None:
    """Release the store connection; errors are logged, not raised."""
    try:
        state.task_store.close()
    except Exception:
        logger.exception("Failed to close task store.")
