# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: AppState, registry: CommandRegistry | None = None) -> None:
    """
    Interactive loop: read a line, run it as a command, print the reply.

    Plain text without a leading slash is treated as /add.
    """
    registry = registry or command_registry
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "todolist"))

    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Type /help for commands, /exit to quit.")

    while True:
        try:
            user_input = input("todo> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            user_input = "/add " + user_input

        try:
            reply = registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command. Nothing was changed."

        if reply is not None:
            _print_ts(reply)

    logger.info("Console connector finished.")
