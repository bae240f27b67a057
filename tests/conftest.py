# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from tasklist.api.server import create_app
from tasklist.core.state import AppState
from tasklist.tasks.local_storage import LocalStorage, LocalTaskPersistence
from tasklist.tasks.task_store import TaskStore, TimestampIds

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the front ends.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the caller's environment.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        host="127.0.0.1",
        port=3001,
        cors_origins=["*"],
        api_base_url="http://testserver",
        request_timeout=5.0,
        local_storage_path=tmp_path / "local_storage.json",
        local_storage_key="todoTasks",
        confirm_delete=True,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 12, 0, tzinfo=UTC), step=timedelta(seconds=1))


@pytest.fixture()
def store(clock: FakeClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def local_store(settings: SimpleNamespace, clock: FakeClock) -> TaskStore:
    persistence = LocalTaskPersistence(LocalStorage(settings.local_storage_path), key="todoTasks")
    return TaskStore(persistence=persistence, id_allocator=TimestampIds(), clock=clock)


@pytest.fixture()
def server_state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, board=store, mode="server")


@pytest.fixture()
def local_state(settings: SimpleNamespace, local_store: TaskStore) -> AppState:
    return AppState(settings=settings, board=local_store, mode="local")


@pytest.fixture()
def api_client(server_state: AppState):
    with TestClient(create_app(server_state)) as client:
        yield client
