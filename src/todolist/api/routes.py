"""
HTTP routes: the TodoService RPC methods, liveness probe and metrics.

RPC endpoints are plain ``def`` functions, so each call runs on a worker
thread from Starlette's thread pool and may block on the store lock without
stalling the event loop.
"""
import time
from typing import Callable, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from todolist.exceptions import TodoListError
from todolist.rpc.connect import SERVICE_PATH
from todolist.rpc.schema import (
    AddTaskRequest,
    DeleteTaskRequest,
    GetTasksRequest,
    Message,
    UpdateTaskRequest,
)
from todolist.rpc.service import TodoService
from todolist.utils.observability import Logger, MetricsRegistry

rpc_router = APIRouter(prefix=SERVICE_PATH.rstrip("/"))
router = APIRouter()
metrics_router = APIRouter()
logger = Logger(__name__)


def _service(request: Request) -> TodoService:
    return request.app.state.todo_service


def _metrics(request: Request) -> Optional[MetricsRegistry]:
    return request.app.state.metrics


def _invoke(request: Request, method: str, handler: Callable, message: Message) -> JSONResponse:
    """Run one RPC handler, record its outcome, and encode the response message."""
    metrics = _metrics(request)
    start = time.perf_counter()
    code = "ok"

    try:
        response = handler(message)
    except TodoListError as e:
        code = e.code.value
        raise
    except Exception as e:
        code = TodoListError.code.value
        logger.log_error("rpc_failed", exc_info=e, method=method)
        raise TodoListError("internal error") from e
    finally:
        if metrics is not None:
            metrics.rpc_latency.labels(method=method).observe(time.perf_counter() - start)
            metrics.rpc_requests.labels(method=method, code=code).inc()
            metrics.tasks_stored.set(len(_service(request).store))

    return JSONResponse(response.to_wire())


# Connect clients send "{}" for empty messages, but a missing body is read
# as the empty message too.

@rpc_router.post("/AddTask")
def add_task(request: Request, body: Optional[AddTaskRequest] = None):
    return _invoke(request, "AddTask", _service(request).add_task, body or AddTaskRequest())


@rpc_router.post("/GetTasks")
def get_tasks(request: Request, body: Optional[GetTasksRequest] = None):
    return _invoke(request, "GetTasks", _service(request).get_tasks, body or GetTasksRequest())


@rpc_router.post("/DeleteTask")
def delete_task(request: Request, body: Optional[DeleteTaskRequest] = None):
    return _invoke(request, "DeleteTask", _service(request).delete_task, body or DeleteTaskRequest())


@rpc_router.post("/UpdateTask")
def update_task(request: Request, body: Optional[UpdateTaskRequest] = None):
    return _invoke(request, "UpdateTask", _service(request).update_task, body or UpdateTaskRequest())


@router.get("/health")
def health_check():
    """
    Liveness probe. Never touches the task table.
    """
    return {"status": "ok"}


@metrics_router.get("/metrics")
def metrics_endpoint(request: Request):
    """
    Expose Prometheus metrics.
    """
    return Response(generate_latest(_metrics(request).registry), media_type=CONTENT_TYPE_LATEST)
