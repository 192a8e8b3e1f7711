"""
RPC module - Connect protocol helpers and TodoService messages.

The service itself lives in ``todolist.rpc.service``.
"""
from .connect import Code, SERVICE_NAME, method_path
from .schema import (
    Task,
    AddTaskRequest,
    AddTaskResponse,
    GetTasksRequest,
    GetTasksResponse,
    DeleteTaskRequest,
    DeleteTaskResponse,
    UpdateTaskRequest,
    UpdateTaskResponse,
)

__all__ = [
    "Code",
    "SERVICE_NAME",
    "method_path",
    "Task",
    "AddTaskRequest",
    "AddTaskResponse",
    "GetTasksRequest",
    "GetTasksResponse",
    "DeleteTaskRequest",
    "DeleteTaskResponse",
    "UpdateTaskRequest",
    "UpdateTaskResponse",
]
