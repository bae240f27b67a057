# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tasklist.logging_setup import setup_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_repeated_setup_replaces_handlers(restore_root_logging, tmp_path: Path) -> None:
    root = restore_root_logging

    setup_logging(log_dir=tmp_path)
    first = list(root.handlers)
    setup_logging(log_dir=tmp_path)

    assert len(root.handlers) == 2
    assert not any(h in first for h in root.handlers)
    file_handlers = [h for h in first if isinstance(h, logging.FileHandler)]
    assert file_handlers and file_handlers[0].stream is None


def test_console_filter_hides_access_lines_but_file_keeps_them(
    restore_root_logging, tmp_path: Path
) -> None:
    setup_logging(log_dir=tmp_path)
    console = next(h for h in restore_root_logging.handlers if not isinstance(h, logging.FileHandler))

    access = logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, "GET /tasks", None, None)
    ours = logging.LogRecord("tasklist.api.server", logging.INFO, __file__, 1, "started", None, None)

    assert not console.filter(access)
    assert console.filter(ours)

    logging.getLogger("uvicorn.access").info("GET /tasks 200")
    for handler in restore_root_logging.handlers:
        handler.flush()
    assert "GET /tasks 200" in (tmp_path / "tasklist.log").read_text("utf-8")
