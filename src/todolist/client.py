"""
TodoClient - synchronous Connect/JSON client for TodoService.

Usage:
    with TodoClient("http://localhost:8080") as client:
        task = client.add_task("Buy milk").task
        client.update_task(task.id, completed=True)
        for t in client.get_tasks().tasks:
            print(t.text, t.completed)

An existing ``httpx.Client`` (for example FastAPI's TestClient) can be passed
instead of a URL; the caller then keeps ownership of it.
"""
from typing import Type, TypeVar, Union

import httpx
from pydantic import ValidationError

from todolist.exceptions import RPCError
from todolist.rpc.connect import (
    Code,
    JSON_CONTENT_TYPE,
    PROTOCOL_VERSION,
    PROTOCOL_VERSION_HEADER,
    method_path,
    parse_error_envelope,
)
from todolist.rpc.schema import (
    AddTaskRequest,
    AddTaskResponse,
    DeleteTaskRequest,
    DeleteTaskResponse,
    GetTasksRequest,
    GetTasksResponse,
    Message,
    UpdateTaskRequest,
    UpdateTaskResponse,
)
from todolist.utils.observability import Logger

logger = Logger(__name__)

M = TypeVar("M", bound=Message)


class TodoClient:
    """Client for the four TodoService methods."""

    def __init__(self, base_url: Union[str, httpx.Client], timeout: float = 10.0):
        if isinstance(base_url, httpx.Client):
            self._http = base_url
            self._owns_http = False
        else:
            self._http = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
            self._owns_http = True

    def __enter__(self) -> "TodoClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def _call(self, method: str, request: Message, response_type: Type[M]) -> M:
        try:
            resp = self._http.post(
                method_path(method),
                json=request.to_wire(),
                headers={
                    "Content-Type": JSON_CONTENT_TYPE,
                    PROTOCOL_VERSION_HEADER: PROTOCOL_VERSION,
                },
            )
        except httpx.TimeoutException as e:
            raise RPCError(Code.DEADLINE_EXCEEDED, str(e)) from e
        except httpx.TransportError as e:
            raise RPCError(Code.UNAVAILABLE, str(e)) from e

        if resp.status_code != 200:
            try:
                body = resp.json()
            except ValueError:
                body = None
            code, message = parse_error_envelope(body, resp.status_code)
            logger.log_event("rpc_error_response", method=method, code=code.value, status=resp.status_code)
            raise RPCError(code, message, http_status=resp.status_code)

        try:
            return response_type.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise RPCError(Code.INTERNAL, f"malformed {method} response: {e}") from e

    def add_task(self, text: str) -> AddTaskResponse:
        return self._call("AddTask", AddTaskRequest(text=text), AddTaskResponse)

    def get_tasks(self) -> GetTasksResponse:
        return self._call("GetTasks", GetTasksRequest(), GetTasksResponse)

    def delete_task(self, task_id: str) -> DeleteTaskResponse:
        return self._call("DeleteTask", DeleteTaskRequest(id=task_id), DeleteTaskResponse)

    def update_task(self, task_id: str, completed: bool) -> UpdateTaskResponse:
        return self._call(
            "UpdateTask", UpdateTaskRequest(id=task_id, completed=completed), UpdateTaskResponse
        )
