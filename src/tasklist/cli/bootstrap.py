# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete board for the chosen mode into AppState:
    server -> in-memory TaskStore with sequential ids
    local  -> TaskStore persisted into the local storage slot, timestamp ids
    remote -> RemoteTaskBoard talking to the task API
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from ..clients.remote import RemoteTaskBoard
from ..config import get_settings
from ..core.state import AppState
from ..tasks.local_storage import LocalStorage, LocalTaskPersistence
from ..tasks.task_store import SequentialIds, TaskStore, TimestampIds

logger = logging.getLogger(__name__)

Mode = Literal["server", "local", "remote"]


def _ensure_local_dirs(settings) -> None:
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    Path(settings.local_storage_path).parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(mode: Mode, *, settings=None) -> AppState:
    """
    Create AppState for one front end / server process.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if mode == "server":
        board = TaskStore(id_allocator=SequentialIds())
    elif mode == "local":
        _ensure_local_dirs(settings)
        persistence = LocalTaskPersistence(
            LocalStorage(settings.local_storage_path),
            key=settings.local_storage_key,
        )
        board = TaskStore(persistence=persistence, id_allocator=TimestampIds())
    elif mode == "remote":
        board = RemoteTaskBoard(settings.api_base_url, timeout=settings.request_timeout)
    else:
        raise ValueError(f"unknown mode: {mode}")

    logger.debug("State created mode=%s board=%s", mode, type(board).__name__)
    return AppState(settings=settings, board=board, mode=mode)
