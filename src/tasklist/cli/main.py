# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState for the chosen mode, then runs either the
HTTP server or the console board.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import click

from ..api.server import run_server
from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _configure_logging(settings) -> None:
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=getattr(settings, "data_dir", ".local/tasklist"), console_level=console_level)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    close = getattr(state.board, "close", None)
    if close is None:
        return
    try:
        close()
    except Exception:
        logger.debug("Board close failed.", exc_info=True)


@click.group()
@click.version_option(version="1.0.0", prog_name="tasklist")
@click.pass_context
def main(ctx: click.Context) -> None:
    """tasklist - a small task list: HTTP API plus two console front ends.

    \b
      tasklist serve            # run the task API on localhost:3001
      tasklist remote           # console board backed by the API
      tasklist local            # console board stored on this machine
    """
    ctx.ensure_object(dict)
    settings = get_settings()
    ctx.obj["settings"] = settings
    _configure_logging(settings)


@main.command("serve")
@click.option("--host", default=None, help="Interface to bind (default from TASKLIST_HOST).")
@click.option("--port", type=int, default=None, help="Port to bind (default from TASKLIST_PORT).")
@click.pass_context
def serve_command(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Run the task API (in-memory, lost on restart)."""
    settings = ctx.obj["settings"]
    logger.info("Starting %s server...", settings.app_name)
    state = create_initial_state("server", settings=settings)
    run_server(state, host=host or settings.host, port=port or settings.port)
    logger.info("Bye.")


@main.command("remote")
@click.option("--api-url", default=None, help="Task API base URL (default from TASKLIST_API_URL).")
@click.pass_context
def remote_command(ctx: click.Context, api_url: str | None) -> None:
    """Console board that drives the task API."""
    settings = ctx.obj["settings"]
    if api_url:
        settings = replace(settings, api_base_url=api_url.rstrip("/"))
    state = create_initial_state("remote", settings=settings)
    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


@main.command("local")
@click.option(
    "--storage-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Local storage file (default from TASKLIST_LOCAL_STORAGE_PATH).",
)
@click.pass_context
def local_command(ctx: click.Context, storage_file: Path | None) -> None:
    """Console board persisted in a local storage file."""
    settings = ctx.obj["settings"]
    if storage_file is not None:
        settings = replace(settings, local_storage_path=storage_file)
    state = create_initial_state("local", settings=settings)
    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
