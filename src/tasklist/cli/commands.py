# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import date, datetime, time as dt_time

from ..core.state import AppState
from ..errors import InvalidInputError, NotFoundError
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Validation and lookup failures become a reply; the store has not
        written anything when it raises them. StorageError propagates.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except InvalidInputError as e:
            logger.debug("Command /%s rejected input: %s", name, e)
            return f"Invalid input: {e}."
        except NotFoundError as e:
            logger.debug("Command /%s: %s", name, e)
            return f"No task #{e.task_id}."

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing / rendering helpers ----


def _parse_id(raw: str) -> int | None:
    raw = raw.lstrip("#")
    if not raw.isdecimal():
        return None
    return int(raw)


def parse_due(raw: str) -> float:
    """
    Parse a local date or date-time ("2026-10-19" or "2026-10-19T18:30")
    into a Unix timestamp. A bare date means the end of that day.
    """
    try:
        day = date.fromisoformat(raw)
    except ValueError:
        pass
    else:
        return datetime.combine(day, dt_time(23, 59, 59)).timestamp()

    try:
        dt = datetime.fromisoformat(raw)
    except ValueError as e:
        raise InvalidInputError(f"bad date {raw!r}, expected YYYY-MM-DD[THH:MM]") from e
    return dt.timestamp()


def _fmt_ts(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M")


def render_task_line(task: Task, now_ts: float | None = None) -> str:
    mark = "x" if task.completed else " "
    line = f"[{mark}] #{task.id} {task.title}"
    if task.due_at is not None:
        line += f" (due {_fmt_ts(task.due_at)})"
    if task.is_overdue(now_ts):
        line += " !"
    return line


def render_task_details(task: Task) -> str:
    lines = [
        f"Task #{task.id}: {task.title}",
        f"  Status: {'done' if task.completed else 'open'}",
        f"  Created: {_fmt_ts(task.created_at)}",
    ]
    if task.due_at is not None:
        overdue = " (overdue)" if task.is_overdue() else ""
        lines.append(f"  Due: {_fmt_ts(task.due_at)}{overdue}")
    if task.description:
        lines.append(f"  Notes: {task.description}")
    return "\n".join(lines)


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    task = state.task_store.add_task(" ".join(args))
    return f"Added {render_task_line(task)}"


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list_tasks()
    if not tasks:
        return "No tasks yet. Use /add <title>."
    now = time.time()
    return "\n".join(render_task_line(t, now) for t in tasks)


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args[0]) if args else None
    if task_id is None:
        return "Usage: /show <id>"
    return render_task_details(state.task_store.get_task(task_id))


def cmd_done(state: AppState, args: list[str]) -> str:
    """
    /done <id>  -> toggle completion (running it again re-opens the task)
    """
    task_id = _parse_id(args[0]) if args else None
    if task_id is None:
        return "Usage: /done <id>"
    task = state.task_store.toggle_completed(task_id)
    verb = "Completed" if task.completed else "Reopened"
    return f"{verb} {render_task_line(task)}"


def cmd_rename(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args[0]) if args else None
    if task_id is None:
        return "Usage: /rename <id> <new title>"
    task = state.task_store.update_title(task_id, " ".join(args[1:]))
    return f"Renamed {render_task_line(task)}"


def cmd_desc(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args[0]) if args else None
    if task_id is None:
        return "Usage: /desc <id> <text>"
    task = state.task_store.update_details(task_id, description=" ".join(args[1:]))
    return f"Notes for #{task.id} {'updated' if task.description else 'cleared'}."


def cmd_due(state: AppState, args: list[str]) -> str:
    """
    /due <id> 2026-10-19        -> due at the end of that day
    /due <id> 2026-10-19T18:30  -> due at that time
    /due <id> none              -> remove the deadline
    """
    task_id = _parse_id(args[0]) if args else None
    if task_id is None or len(args) < 2:
        return "Usage: /due <id> <YYYY-MM-DD[THH:MM]|none>"

    if args[1].lower() in ("none", "clear", "-"):
        task = state.task_store.update_details(task_id, clear_due=True)
        return f"Deadline removed from #{task.id}."

    task = state.task_store.update_details(task_id, due_at=parse_due(args[1]))
    return f"Updated {render_task_line(task)}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args[0]) if args else None
    if task_id is None:
        return "Usage: /delete <id>"
    state.task_store.delete_task(task_id)
    return f"Deleted task #{task_id}."


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list_tasks()
    done = sum(1 for t in tasks if t.completed)
    overdue = len(state.task_store.list_overdue())
    db_path = state.task_store.db_path
    return (
        "Status:\n"
        f"  Database: {db_path}\n"
        f"  Tasks: {len(tasks)} total, {done} done, {len(tasks) - done} open\n"
        f"  Overdue: {overdue}"
    )


registry.register("help", cmd_help, "Show this help")
registry.register("add", cmd_add, "Add a task: /add <title>")
registry.register("list", cmd_list, "List all tasks", aliases=["ls"])
registry.register("show", cmd_show, "Show one task: /show <id>")
registry.register("done", cmd_done, "Toggle completion: /done <id>", aliases=["toggle"])
registry.register("rename", cmd_rename, "Change title: /rename <id> <title>")
registry.register("desc", cmd_desc, "Set notes: /desc <id> <text>")
registry.register("due", cmd_due, "Set deadline: /due <id> <YYYY-MM-DD[THH:MM]|none>")
registry.register("delete", cmd_delete, "Delete a task: /delete <id>", aliases=["rm"])
registry.register("status", cmd_status, "Show store totals")
