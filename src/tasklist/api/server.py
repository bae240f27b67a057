# src/tasklist/api/server.py

"""
Task API server.

Endpoints:
    GET    /tasks         -> all tasks, insertion order
    POST   /tasks         -> create from {"text": ...}
    PUT    /tasks/{id}    -> toggle completion
    DELETE /tasks/{id}    -> remove
    GET    /health        -> liveness

The store is built once by the caller and handed to create_app(); routes
reach it through app.state, never through a module-level global.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..core.ports import TaskBoard
from ..core.state import AppState
from ..tasks.errors import NotFoundError, ValidationError
from .schemas import ErrorOut, HealthOut, TaskCreate, TaskOut

logger = logging.getLogger(__name__)

router = APIRouter()


def get_board(request: Request) -> TaskBoard:
    return request.app.state.app_state.board


def _parse_task_id(raw: str) -> int:
    # ASCII digits only: int() would also take "1_0", " 1", "+1" and non-ASCII digits.
    if not (raw.isascii() and raw.isdigit()):
        raise NotFoundError(raw)
    return int(raw)


@router.get("/tasks", response_model=list[TaskOut])
async def list_tasks(board: TaskBoard = Depends(get_board)):
    return [TaskOut.from_task(t) for t in board.list_tasks()]


@router.post(
    "/tasks",
    status_code=201,
    response_model=TaskOut,
    responses={400: {"model": ErrorOut}},
)
async def create_task(
    payload: TaskCreate | None = Body(default=None),
    board: TaskBoard = Depends(get_board),
):
    task = board.create_task(payload.text if payload is not None else None)
    logger.info("Task created id=%s", task.id)
    return TaskOut.from_task(task)


@router.put("/tasks/{task_id}", response_model=TaskOut, responses={404: {"model": ErrorOut}})
async def toggle_task(task_id: str, board: TaskBoard = Depends(get_board)):
    task = board.toggle_complete(_parse_task_id(task_id))
    logger.info("Task toggled id=%s completed=%s", task.id, task.completed)
    return TaskOut.from_task(task)


@router.delete(
    "/tasks/{task_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"model": ErrorOut}},
)
async def delete_task(task_id: str, board: TaskBoard = Depends(get_board)):
    parsed = _parse_task_id(task_id)
    board.delete_task(parsed)
    logger.info("Task deleted id=%s", parsed)
    return Response(status_code=204)


@router.get("/health", response_model=HealthOut)
async def health():
    return HealthOut(status="OK", message="Server is running")


async def _on_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=400, content={"error": exc.message})


async def _on_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=404, content={"error": exc.message})


async def _on_bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Malformed request %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(state: AppState) -> FastAPI:
    settings = state.settings
    app = FastAPI(title=f"{getattr(settings, 'app_name', 'tasklist')} API", version="1.0.0")
    app.state.app_state = state

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(getattr(settings, "cors_origins", ["*"])),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _on_validation_error)
    app.add_exception_handler(NotFoundError, _on_not_found)
    app.add_exception_handler(RequestValidationError, _on_bad_request)

    app.include_router(router)
    return app


def run_server(state: AppState, *, host: str, port: int) -> None:
    import uvicorn

    logger.info("Task API listening on http://%s:%s", host, port)
    # log_config=None: uvicorn records flow into the handlers from logging_setup.
    uvicorn.run(create_app(state), host=host, port=port, log_config=None)
