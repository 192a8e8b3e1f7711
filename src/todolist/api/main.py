import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from todolist.api.cors import PreflightCORSMiddleware
from todolist.api.routes import router, rpc_router, metrics_router
from todolist.config import Settings, settings as default_settings
from todolist.exceptions import TodoListError
from todolist.rpc.connect import (
    Code,
    JSON_CONTENT_TYPE,
    SERVICE_PATH,
    error_envelope,
)
from todolist.rpc.service import TodoService
from todolist.store import TaskStore
from todolist.utils.observability import CORRELATION_ID, Logger, MetricsRegistry

REQUEST_ID_HEADER = "X-Request-ID"

logger = Logger(__name__)


def _connect_error(code: Code, message: str) -> JSONResponse:
    return JSONResponse(error_envelope(code, message), status_code=code.http_status)


async def handle_todolist_error(request: Request, exc: TodoListError) -> JSONResponse:
    # Internal failures were already logged as rpc_failed.
    if exc.code is not Code.INTERNAL:
        logger.log_event("rpc_rejected", path=request.url.path, code=exc.code.value, message=exc.message)
    return _connect_error(exc.code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    if not request.url.path.startswith(SERVICE_PATH):
        return await request_validation_exception_handler(request, exc)

    content_type = request.headers.get("content-type", JSON_CONTENT_TYPE)
    if content_type.split(";")[0].strip().lower() != JSON_CONTENT_TYPE:
        return Response(status_code=415, headers={"Accept-Post": JSON_CONTENT_TYPE})

    errors = exc.errors()
    message = errors[0].get("msg", "invalid request") if errors else "invalid request"
    logger.log_event("rpc_rejected", path=request.url.path, code=Code.INVALID_ARGUMENT.value, message=message)
    return _connect_error(Code.INVALID_ARGUMENT, f"invalid request message: {message}")


def create_app(
    service: Optional[TodoService] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        service: Handler to serve; a fresh one over an empty TaskStore if omitted
        settings: Configuration; the process-wide settings if omitted
    """
    settings = settings or default_settings
    if service is None:
        service = TodoService(TaskStore())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.todo_service.store.clear()
        logger.log_event("api_shutdown_complete")

    app = FastAPI(
        title="Todo List Service",
        description="In-memory task tracking over Connect RPC.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.todo_service = service
    app.state.metrics = MetricsRegistry() if settings.observability.enable_metrics else None

    # Error handling
    app.add_exception_handler(TodoListError, handle_todolist_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    # Middleware (last registered is outermost)
    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
        expose_headers=settings.cors.expose_headers,
    )

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = CORRELATION_ID.set(request_id)
        try:
            response = await call_next(request)
        finally:
            CORRELATION_ID.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    # Routes
    app.include_router(rpc_router)
    app.include_router(router)
    if app.state.metrics is not None:
        app.include_router(metrics_router)

    logger.log_event(
        "api_startup_complete",
        environment=settings.observability.environment,
        metrics_enabled=app.state.metrics is not None,
    )

    return app
