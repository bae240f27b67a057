# src/tasklist/clients/remote.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..tasks.errors import NotFoundError, TaskError, ValidationError
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


class TaskApiError(TaskError):
    """Transport failure or unexpected response from the task API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error_message(resp: httpx.Response, default: str) -> str:
    try:
        body = resp.json()
    except ValueError:
        return default
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return default


class RemoteTaskBoard:
    """
    TaskBoard backed by the HTTP task API.

    The underlying httpx.Client can be injected (tests pass a client bound to
    the ASGI app); otherwise one is created for base_url and owned here.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=self._base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    # ---- low-level helpers ----

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Task API request failed %s %s: %s", method, path, e)
            raise TaskApiError(f"Cannot reach task API at {self._base_url}") from e

        if resp.status_code == 400:
            raise ValidationError(_error_message(resp, "Task text is required"))
        if resp.status_code == 404:
            raise NotFoundError(path.rsplit("/", 1)[-1], _error_message(resp, "Task not found"))
        if resp.is_error:
            logger.warning("Task API error %s %s -> %s", method, path, resp.status_code)
            raise TaskApiError(
                _error_message(resp, f"Unexpected response {resp.status_code}"),
                status_code=resp.status_code,
            )
        return resp

    @staticmethod
    def _task(resp: httpx.Response) -> Task:
        try:
            return Task.from_api_dict(resp.json())
        except (KeyError, TypeError, ValueError) as e:
            raise TaskApiError("Malformed task in API response", status_code=resp.status_code) from e

    # ---- TaskBoard ----

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health").json()

    def list_tasks(self) -> list[Task]:
        resp = self._request("GET", "/tasks")
        try:
            return [Task.from_api_dict(item) for item in resp.json()]
        except (KeyError, TypeError, ValueError) as e:
            raise TaskApiError("Malformed task list in API response", status_code=resp.status_code) from e

    def create_task(self, text: str | None) -> Task:
        return self._task(self._request("POST", "/tasks", json={"text": text}))

    def toggle_complete(self, task_id: int) -> Task:
        return self._task(self._request("PUT", f"/tasks/{task_id}"))

    def edit_task(self, task_id: int, text: str | None) -> Task:
        raise TaskError("Editing tasks is not supported by the task API")

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/tasks/{task_id}")
