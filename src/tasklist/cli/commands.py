# src/tasklist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..connectors.board_view import render_board
from ..core.state import AppState
from ..tasks.errors import NotFoundError, TaskError, ValidationError

ConfirmPrompt = Callable[[str], bool]
CommandHandler2 = Callable[[AppState, str], str]
CommandHandler3 = Callable[[AppState, str, ConfirmPrompt | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

RETRY_HINT = "Please try again."
FETCH_HINT = "Make sure the backend server is running."


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

    def handle(
        self,
        state: AppState,
        line: str,
        confirm: ConfirmPrompt | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        arg_text = parts[1].strip() if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        nparams = len(inspect.signature(handler).parameters)
        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, arg_text, confirm)

        h2 = cast(CommandHandler2, handler)
        return h2(state, arg_text)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Any line that is not a command is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def alert(action: str, exc: TaskError, hint: str = RETRY_HINT) -> str:
    """Interrupt-style notification naming the failed action."""
    return f"[ALERT] Failed to {action}. {hint} ({exc.message})"


def _style(state: AppState) -> str:
    return "remote" if state.is_remote else "local"


def _parse_id(raw: str) -> int | None:
    parts = raw.split()
    if not parts or not (parts[0].isascii() and parts[0].isdigit()):
        return None
    return int(parts[0])


def _find(state: AppState, task_id: int):
    for task in state.board.list_tasks():
        if task.id == task_id:
            return task
    raise NotFoundError(task_id)


def show_board(state: AppState) -> str:
    try:
        tasks = state.board.list_tasks()
    except TaskError as e:
        logger.info("Fetching tasks failed: %s", e.message)
        return alert("fetch tasks", e, FETCH_HINT if state.is_remote else RETRY_HINT)
    return render_board(tasks, _style(state))


def cmd_help(state: AppState, arg_text: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, arg_text: str) -> str:
    return show_board(state)


def cmd_add(state: AppState, arg_text: str) -> str:
    if not arg_text:
        return "Usage: /add <task text>"
    try:
        task = state.board.create_task(arg_text)
    except ValidationError as e:
        if state.is_remote:
            return alert("add task", e)
        return e.message
    except TaskError as e:
        return alert("add task", e)
    logger.debug("Console added task id=%s", task.id)
    return show_board(state)


def _set_completed(state: AppState, arg_text: str, want: bool) -> str:
    task_id = _parse_id(arg_text)
    if task_id is None:
        return f"Usage: /{'done' if want else 'undo'} <task id>"
    try:
        task = _find(state, task_id)
        if task.completed == want:
            return f"Task #{task_id} is already {'completed' if want else 'pending'}."
        state.board.toggle_complete(task_id)
    except TaskError as e:
        return alert("update task", e)
    return show_board(state)


def cmd_done(state: AppState, arg_text: str) -> str:
    return _set_completed(state, arg_text, True)


def cmd_undo(state: AppState, arg_text: str) -> str:
    return _set_completed(state, arg_text, False)


def cmd_toggle(state: AppState, arg_text: str) -> str:
    task_id = _parse_id(arg_text)
    if task_id is None:
        return "Usage: /toggle <task id>"
    try:
        state.board.toggle_complete(task_id)
    except TaskError as e:
        return alert("update task", e)
    return show_board(state)


def cmd_edit(state: AppState, arg_text: str) -> str:
    """
    /edit <id> <new text>  -> replace a task's text (local mode only)
    """
    if state.is_remote:
        return "Editing is only available in local mode."

    parts = arg_text.split(maxsplit=1)
    task_id = _parse_id(arg_text)
    if task_id is None:
        return "Usage: /edit <task id> <new text>"
    try:
        state.board.edit_task(task_id, parts[1] if len(parts) > 1 else "")
    except ValidationError as e:
        return f"[ALERT] {e.message}"
    except TaskError as e:
        return alert("edit task", e)
    return show_board(state)


def cmd_delete(state: AppState, arg_text: str, confirm: ConfirmPrompt | None = None) -> str:
    task_id = _parse_id(arg_text)
    if task_id is None:
        return "Usage: /delete <task id>"

    if confirm is not None and getattr(state.settings, "confirm_delete", True):
        if not confirm("Are you sure you want to delete this task?"):
            return "Delete cancelled."

    try:
        state.board.delete_task(task_id)
    except TaskError as e:
        return alert("delete task", e)
    return show_board(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show pending and completed tasks.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.")
registry.register("done", cmd_done, help_text="Mark a task complete: /done <id>.", aliases=["complete"])
registry.register("undo", cmd_undo, help_text="Move a completed task back to pending: /undo <id>.")
registry.register("toggle", cmd_toggle, help_text="Flip a task's completion: /toggle <id>.")
registry.register("edit", cmd_edit, help_text="Change a task's text (local mode): /edit <id> <text>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm", "del"])
