# src/tasklist/tasks/task_store.py

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from ..core.ports import TaskPersistence
from .errors import NotFoundError, ValidationError
from .task_models import Task, partition_tasks, utc_now

logger = logging.getLogger(__name__)


class SequentialIds:
    """Server-side ids: 1, 2, 3, ... never reused."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def seed(self, highest: int) -> None:
        self._next = max(self._next, highest + 1)

    def __call__(self) -> int:
        task_id = self._next
        self._next += 1
        return task_id


class TimestampIds:
    """
    Local ids derived from the wall clock (milliseconds since epoch).

    Two tasks created within the same millisecond, or after the clock went
    backwards, still get strictly increasing ids.
    """

    def __init__(self, clock_ms: Callable[[], int] | None = None) -> None:
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def seed(self, highest: int) -> None:
        self._last = max(self._last, highest)

    def __call__(self) -> int:
        self._last = max(self._clock_ms(), self._last + 1)
        return self._last


class TaskStore:
    """
    Ordered in-process task store.

    - insertion order is kept; tasks are never reordered
    - every mutation rewrites the whole list through the optional persistence
    - if that write fails, the in-memory list is left untouched

    Thread-safety:
    - lookup-then-mutate sequences run under one lock
    """

    def __init__(
        self,
        *,
        persistence: TaskPersistence | None = None,
        id_allocator: SequentialIds | TimestampIds | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._persistence = persistence
        self._next_id = id_allocator or SequentialIds()
        self._clock = clock
        self._lock = threading.RLock()
        self._tasks: list[Task] = []

        if persistence is not None:
            self._tasks = list(persistence.load())
            if self._tasks:
                self._next_id.seed(max(t.id for t in self._tasks))

        backend = type(persistence).__name__ if persistence is not None else "memory"
        logger.info("TaskStore ready backend=%s total=%s", backend, len(self._tasks))

    # ---- low-level helpers ----

    @staticmethod
    def _clean_text(text: str | None, message: str) -> str:
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValidationError(message)
        return cleaned

    def _index_of(self, task_id: int) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise NotFoundError(task_id)

    def _commit(self, tasks: list[Task]) -> None:
        if self._persistence is not None:
            self._persistence.save(tasks)
        self._tasks = tasks

    # ---- public API ----

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def get_task(self, task_id: int) -> Task:
        with self._lock:
            return self._tasks[self._index_of(task_id)]

    def pending_tasks(self) -> list[Task]:
        return partition_tasks(self.list_tasks())[0]

    def completed_tasks(self) -> list[Task]:
        return partition_tasks(self.list_tasks())[1]

    def create_task(self, text: str | None) -> Task:
        cleaned = self._clean_text(text, "Task text is required")

        with self._lock:
            now = self._clock()
            task = Task(
                id=self._next_id(),
                text=cleaned,
                completed=False,
                created_at=now,
                updated_at=now,
            )
            self._commit([*self._tasks, task])

        logger.debug("Task added id=%s", task.id)
        return task

    def toggle_complete(self, task_id: int) -> Task:
        with self._lock:
            idx = self._index_of(task_id)
            current = self._tasks[idx]
            now = self._clock()
            completed = not current.completed
            updated = replace(
                current,
                completed=completed,
                updated_at=now,
                completed_at=now if completed else None,
            )
            tasks = list(self._tasks)
            tasks[idx] = updated
            self._commit(tasks)

        logger.debug("Task toggled id=%s completed=%s", task_id, updated.completed)
        return updated

    def edit_task(self, task_id: int, text: str | None) -> Task:
        cleaned = self._clean_text(text, "Task cannot be empty!")

        with self._lock:
            idx = self._index_of(task_id)
            updated = replace(self._tasks[idx], text=cleaned)
            tasks = list(self._tasks)
            tasks[idx] = updated
            self._commit(tasks)

        logger.debug("Task edited id=%s", task_id)
        return updated

    def delete_task(self, task_id: int) -> None:
        with self._lock:
            idx = self._index_of(task_id)
            self._commit(self._tasks[:idx] + self._tasks[idx + 1 :])

        logger.debug("Task deleted id=%s", task_id)
