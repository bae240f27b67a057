# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Front ends depend on TaskBoard instead of a concrete store, so the console
can drive either the local store or the HTTP API client.
"""

from typing import Protocol

from ..tasks.task_models import Task


class TaskPersistence(Protocol):
    """Whole-list storage medium behind a TaskStore (rewritten on every mutation)."""

    def load(self) -> list[Task]: ...
    def save(self, tasks: list[Task]) -> None: ...


class TaskBoard(Protocol):
    """The four task operations plus edit, as seen by a front end."""

    def list_tasks(self) -> list[Task]: ...
    def create_task(self, text: str | None) -> Task: ...
    def toggle_complete(self, task_id: int) -> Task: ...
    def edit_task(self, task_id: int, text: str | None) -> Task: ...
    def delete_task(self, task_id: int) -> None: ...
