# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ports import TaskBoard


@dataclass
class AppState:
    """
    Everything a server route or console command needs, built once in bootstrap.

    board is a TaskStore for the server and the local client, and a
    RemoteTaskBoard for the remote client.
    """

    settings: Any
    board: TaskBoard
    mode: str = "local"

    @property
    def is_remote(self) -> bool:
        return self.mode == "remote"
