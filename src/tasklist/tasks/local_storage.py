# src/tasklist/tasks/local_storage.py

"""
Client-local key/value slot, the terminal counterpart of a browser's localStorage.

The slot is a single JSON object {key: string value} stored in one file.
Values are strings, so callers own their own encoding (tasks are stored as a
JSON array string under one fixed key).
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_TASKS_KEY = "todoTasks"


class LocalStorage:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read local storage from %s; starting empty.", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Local storage at %s is not an object; starting empty.", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        try:
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)


class LocalTaskPersistence:
    """Serializes the whole task list into one LocalStorage key on every save."""

    def __init__(self, storage: LocalStorage, key: str = DEFAULT_TASKS_KEY) -> None:
        self._storage = storage
        self._key = key

    def load(self) -> list[Task]:
        raw = self._storage.get_item(self._key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError:
            logger.exception("Stored tasks under %r are not valid JSON; ignoring them.", self._key)
            return []
        if not isinstance(items, list):
            return []

        tasks: list[Task] = []
        seen: set[int] = set()
        for item in items:
            try:
                task = Task.from_local_dict(item)
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed stored task: %r", item)
                continue
            if task.id in seen:
                logger.warning("Skipping stored task with duplicate id: %r", item)
                continue
            seen.add(task.id)
            tasks.append(task)
        logger.info("Loaded %d tasks from %s", len(tasks), self._storage.path)
        return tasks

    def save(self, tasks: list[Task]) -> None:
        payload = json.dumps([t.to_local_dict() for t in tasks], ensure_ascii=False)
        self._storage.set_item(self._key, payload)
