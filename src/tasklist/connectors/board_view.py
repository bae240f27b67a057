# src/tasklist/connectors/board_view.py

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Literal

from ..tasks.task_models import Task, partition_tasks

BoardStyle = Literal["remote", "local"]


def format_time(ts: datetime) -> str:
    """Local wall-clock time, e.g. '3:04 PM'."""
    return ts.astimezone().strftime("%I:%M %p").lstrip("0")


def format_date_time(ts: datetime) -> str:
    """Local date and time, e.g. 'Oct 9, 2026, 03:04 PM'."""
    local = ts.astimezone()
    return f"{local:%b} {local.day}, {local:%Y, %I:%M %p}"


def _render_task(task: Task, style: BoardStyle) -> list[str]:
    mark = "x" if task.completed else " "
    head = f"  [{mark}] #{task.id}  {task.text}"
    if style == "remote":
        return [f"{head}  ({format_time(task.updated_at)})"]

    meta = [f"Created: {format_date_time(task.created_at)}"]
    if task.completed and task.completed_at:
        meta.append(f"Completed: {format_date_time(task.completed_at)}")
    return [head, "        " + "  ".join(meta)]


def _render_section(title: str, tasks: list[Task], empty: str, style: BoardStyle) -> list[str]:
    lines = [f"{title} ({len(tasks)})"]
    if not tasks:
        lines.append(f"  {empty}")
        return lines
    for task in tasks:
        lines.extend(_render_task(task, style))
    return lines


def render_board(tasks: Iterable[Task], style: BoardStyle = "local") -> str:
    """Full re-render: pending section, then completed section, each with a count."""
    pending, completed = partition_tasks(tasks)
    if style == "remote":
        empty_pending, empty_completed = "No pending tasks", "No completed tasks"
    else:
        empty_pending, empty_completed = "No pending tasks. Add one above!", "No completed tasks yet"

    lines = _render_section("Pending Tasks", pending, empty_pending, style)
    lines.append("")
    lines.extend(_render_section("Completed Tasks", completed, empty_completed, style))
    return "\n".join(lines)
