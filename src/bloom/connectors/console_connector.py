# src/bloom/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def handle_line(state: AppState, line: str) -> str | None:
    """
    Dispatch one console line.

    Slash commands go through the registry; any other text adds a
    difficulty-1 task. Returns the reply, or None for blank lines.
    """
    line = line.strip()
    if not line:
        return None

    try:
        reply = command_registry.handle(state, line)
        if reply is not None:
            return reply
        task = state.day.add_task(line, 1)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    if task is None:
        return None
    return f"Added: {task.title} (difficulty {task.difficulty})"


def run_console_loop(
    state: AppState,
    *,
    read: InputFn = input,
    write: OutputFn = print,
) -> None:
    logger.info("Console connector started (day=%s).", state.day.date_key)
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "bloom"))

    write(f"[{_ts_local()}] [{app_name}] Today's garden: {state.day.date_key}. Use /help for commands, /exit to quit.\n")

    while True:
        try:
            user_input = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            write(f"[{_ts_local()}] {reply}")

    logger.info("Console connector finished.")
