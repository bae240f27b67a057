# tests/fakes.py

from __future__ import annotations

from datetime import datetime, timedelta

from tasklist.tasks.task_models import Task


class FakeClock:
    """
    Deterministic clock for the store.

    Each call returns the current instant and then advances by `step`, so
    consecutive mutations get distinct, ordered timestamps.
    """

    def __init__(self, start: datetime, step: timedelta = timedelta(0)) -> None:
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        self.calls += 1
        return current


class FailingPersistence:
    """TaskPersistence whose writes can be switched to fail."""

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.saved: list[list[Task]] = []
        self.initial = list(tasks or [])
        self.fail = False

    def load(self) -> list[Task]:
        return list(self.initial)

    def save(self, tasks: list[Task]) -> None:
        if self.fail:
            raise OSError("disk full")
        self.saved.append(list(tasks))


class ScriptedInput:
    """input() replacement that replays lines, then raises EOFError."""

    def __init__(self, lines: list[str]) -> None:
        self.lines = list(lines)
        self.prompts: list[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)
