# src/tasklist/api/schemas.py

from __future__ import annotations

from pydantic import BaseModel

from ..tasks.task_models import Task


class TaskCreate(BaseModel):
    # Optional so a missing field reaches the store and gets the same 400 as empty text.
    text: str | None = None


class TaskOut(BaseModel):
    id: int
    text: str
    isCompleted: bool
    timestamp: str

    @classmethod
    def from_task(cls, task: Task) -> TaskOut:
        return cls.model_validate(task.to_api_dict())


class HealthOut(BaseModel):
    status: str
    message: str


class ErrorOut(BaseModel):
    error: str
