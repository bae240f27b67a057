# src/tasklist/tasks/errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for every failure a task board reports to its caller."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskError, ValueError):
    """Task text missing or empty after trimming."""


class NotFoundError(TaskError, LookupError):
    """No task with the requested id."""

    def __init__(self, task_id: int | str, message: str = "Task not found") -> None:
        super().__init__(message)
        self.task_id = task_id
