# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import cmd_add, registry as command_registry, show_board
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def run_console_loop(
    state: AppState,
    *,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> None:
    """
    Interactive task board.

    A plain line adds a task; slash commands toggle, edit and delete. The board
    is re-rendered in full after every change.
    """
    logger.info("Console connector started (mode=%s).", state.mode)
    app_name = str(getattr(state.settings, "app_name", "tasklist"))

    def confirm(question: str) -> bool:
        try:
            answer = input_fn(f"{question} [y/N]: ")
        except (EOFError, KeyboardInterrupt):
            return False
        return answer.strip().lower() in ("y", "yes")

    output_fn(f"[{_ts_local()}] {app_name} ({state.mode}). Type a task to add it. Use /help for commands, /exit to quit.\n")
    output_fn(show_board(state))

    while True:
        try:
            user_input = input_fn(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            output_fn("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input, confirm=confirm)
            if reply is None:
                reply = cmd_add(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        output_fn(reply)

    logger.info("Console connector finished.")
