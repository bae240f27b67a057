# src/tasklist/tasks/task_models.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_iso(ts: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z (JS toISOString format)."""
    return ts.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def from_iso(raw: str) -> datetime:
    ts = datetime.fromisoformat(raw)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


@dataclass(frozen=True, slots=True)
class Task:
    """
    Canonical task record.

    Timestamp policy:
    - created_at is fixed at creation
    - updated_at is overwritten on every completion toggle (API "timestamp")
    - completed_at is set when the flag becomes true and cleared when it becomes false
    """

    id: int
    text: str
    completed: bool
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None

    def to_api_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "isCompleted": self.completed,
            "timestamp": to_iso(self.updated_at),
        }

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> Task:
        """
        Build a Task from the API shape.

        The API only carries the last-modified timestamp, so it stands in for
        created_at as well. completed_at is unknown on this side.
        """
        ts = from_iso(str(data["timestamp"]))
        return cls(
            id=int(data["id"]),
            text=str(data["text"]),
            completed=bool(data["isCompleted"]),
            created_at=ts,
            updated_at=ts,
        )

    def to_local_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": to_iso(self.created_at),
            "completedAt": to_iso(self.completed_at) if self.completed_at else None,
        }

    @classmethod
    def from_local_dict(cls, data: dict[str, Any]) -> Task:
        """Raises ValueError for records that break the create-time rules (empty text, non-bool flag)."""
        text = data["text"]
        if not isinstance(text, str) or not text.strip():
            raise ValueError("task text must be a non-empty string")
        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError("completed must be a boolean")
        created_at = from_iso(str(data["createdAt"]))
        raw_done = data.get("completedAt")
        completed_at = from_iso(str(raw_done)) if raw_done else None
        return cls(
            id=int(data["id"]),
            text=text.strip(),
            completed=completed,
            created_at=created_at,
            updated_at=completed_at or created_at,
            completed_at=completed_at if completed else None,
        )


def partition_tasks(tasks: Iterable[Task]) -> tuple[list[Task], list[Task]]:
    """Split tasks into (pending, completed), keeping insertion order in both."""
    pending: list[Task] = []
    completed: list[Task] = []
    for task in tasks:
        (completed if task.completed else pending).append(task)
    return pending, completed
