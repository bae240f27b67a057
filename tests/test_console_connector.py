# tests/test_console_connector.py

from __future__ import annotations

from datetime import UTC, datetime

from tasklist.connectors.board_view import format_date_time, format_time, render_board
from tasklist.connectors.console_connector import run_console_loop
from tasklist.core.state import AppState
from tasklist.tasks.task_models import Task

from .fakes import ScriptedInput


def test_plain_lines_add_tasks_and_exit_stops_loop(local_state: AppState) -> None:
    scripted = ScriptedInput(["Walk dog", "", "   buy milk  ", "/exit", "never read"])
    out: list[str] = []

    run_console_loop(local_state, input_fn=scripted, output_fn=out.append)

    assert [t.text for t in local_state.board.list_tasks()] == ["Walk dog", "buy milk"]
    assert scripted.lines == ["never read"]
    assert "Pending Tasks (2)" in out[-1]


def test_loop_ends_on_eof(local_state: AppState) -> None:
    out: list[str] = []
    run_console_loop(local_state, input_fn=ScriptedInput([]), output_fn=out.append)
    assert any("No pending tasks. Add one above!" in line for line in out)


def test_delete_confirmation_prompt_is_read_from_input(local_state: AppState) -> None:
    task = local_state.board.create_task("Walk dog")
    scripted = ScriptedInput([f"/delete {task.id}", "n", f"/delete {task.id}", "y"])
    out: list[str] = []

    run_console_loop(local_state, input_fn=scripted, output_fn=out.append)

    assert "Delete cancelled." in out
    assert local_state.board.list_tasks() == []
    assert any("[y/N]" in p for p in scripted.prompts)


def test_crashing_handler_is_reported_not_raised(local_state: AppState) -> None:
    class BrokenBoard:
        def list_tasks(self):
            return []

        def create_task(self, text):
            raise RuntimeError("boom")

    state = AppState(settings=local_state.settings, board=BrokenBoard(), mode="local")  # type: ignore[arg-type]
    out: list[str] = []

    run_console_loop(state, input_fn=ScriptedInput(["hello"]), output_fn=out.append)

    assert "Internal error while handling a command." in out


def _task(task_id: int, text: str, completed: bool) -> Task:
    ts = datetime(2026, 10, 9, 15, 4, tzinfo=UTC)
    return Task(
        id=task_id,
        text=text,
        completed=completed,
        created_at=ts,
        updated_at=ts,
        completed_at=ts if completed else None,
    )


def test_render_board_remote_style_shows_time_and_plain_empty_lines() -> None:
    out = render_board([_task(1, "a", False)], "remote")

    assert "Pending Tasks (1)" in out
    assert f"[ ] #1  a  ({format_time(_task(1, 'a', False).updated_at)})" in out
    assert "No completed tasks" in out
    assert "Created:" not in out


def test_render_board_local_style_shows_created_and_completed() -> None:
    done = _task(2, "b", True)
    out = render_board([_task(1, "a", False), done], "local")

    assert "[x] #2  b" in out
    assert f"Completed: {format_date_time(done.completed_at)}" in out
    assert out.index("Pending Tasks") < out.index("Completed Tasks")


def test_format_helpers_drop_leading_zeros() -> None:
    ts = datetime(2026, 10, 9, 15, 4, tzinfo=UTC).astimezone()
    assert not format_time(ts).startswith("0")
    assert format_date_time(ts).startswith(f"Oct {ts.day}, 2026, ")
