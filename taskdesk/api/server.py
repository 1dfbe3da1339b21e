"""
Task API Server — FastAPI application exposing the task operations.

Routes (task routes under the configured prefix, default /api):
    POST   /api/tasks            create
    GET    /api/tasks            list (status?, sort?, order?)
    GET    /api/tasks/summary    per-status counts
    GET    /api/tasks/{id}       fetch one
    PUT    /api/tasks/{id}       partial update
    DELETE /api/tasks/{id}       delete, echoing the removed task
    GET    /health               liveness
    GET    /ready                database readiness

Run:
    taskdesk serve
Or:
    uvicorn --factory taskdesk.api.server:create_app --port 3001
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, TypeVar

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskdesk.db.session import init_db
from taskdesk.db.task_store import TaskStore
from taskdesk.engine.config import TaskdeskConfig, get_config
from taskdesk.engine.errors import (
    TaskdeskInvalidIdError,
    TaskdeskNotFoundError,
    TaskdeskValidationError,
)
from taskdesk.engine.health import HealthStatus, check_database, liveness_payload
from taskdesk.engine.logging import FileLogger, log_api_request, log_system_event
from taskdesk.rules.validate_task import VALIDATION_FAILED
from taskdesk.services.task_service import TaskService

logger = logging.getLogger("taskdesk.api")

T = TypeVar("T")

CLIENT_ERRORS = (TaskdeskValidationError, TaskdeskInvalidIdError, TaskdeskNotFoundError)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def _run(failure_message: str, operation: Callable[..., T], *args: Any) -> T:
    """
    Run a service call. Client errors propagate to their handlers; anything
    else is logged with its traceback and answered with an opaque 500.
    """
    try:
        return operation(*args)
    except CLIENT_ERRORS:
        raise
    except Exception:
        logger.exception(failure_message)
        raise HTTPException(status_code=500, detail=failure_message) from None


# ---------------------------------------------------------------------------
# Task routes
# ---------------------------------------------------------------------------

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", status_code=201)
def create_task(
    payload: Any = Body(None),
    service: TaskService = Depends(get_task_service),
) -> Dict[str, Any]:
    task = _run("Failed to create task", service.create, payload)
    return {"message": "Task created successfully", "task": task.to_json()}


@router.get("")
def list_tasks(
    status: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    service: TaskService = Depends(get_task_service),
) -> Dict[str, Any]:
    tasks = _run("Failed to fetch tasks", service.list_tasks, status, sort, order)
    return {"count": len(tasks), "tasks": [t.to_json() for t in tasks]}


@router.get("/summary")
def task_summary(service: TaskService = Depends(get_task_service)) -> Dict[str, Any]:
    counts = _run("Failed to fetch task summary", service.status_counts)
    return {"total": sum(counts.values()), "counts": counts}


@router.get("/{task_id}")
def get_task(task_id: str, service: TaskService = Depends(get_task_service)) -> Dict[str, Any]:
    task = _run("Failed to fetch task", service.get, task_id)
    return {"task": task.to_json()}


@router.put("/{task_id}")
def update_task(
    task_id: str,
    payload: Any = Body(None),
    service: TaskService = Depends(get_task_service),
) -> Dict[str, Any]:
    task = _run("Failed to update task", service.update, task_id, payload)
    return {"message": "Task updated successfully", "task": task.to_json()}


@router.delete("/{task_id}")
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)) -> Dict[str, Any]:
    task = _run("Failed to delete task", service.delete, task_id)
    return {"message": "Task deleted successfully", "deletedTask": task.to_json()}


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(TaskdeskValidationError)
    async def _validation_error(request: Request, exc: TaskdeskValidationError) -> JSONResponse:
        body: Dict[str, Any] = {"error": exc.message}
        if exc.validation_errors:
            body["details"] = exc.validation_errors
        return JSONResponse(status_code=400, content=body)

    @app.exception_handler(TaskdeskInvalidIdError)
    async def _invalid_id(request: Request, exc: TaskdeskInvalidIdError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(TaskdeskNotFoundError)
    async def _not_found(request: Request, exc: TaskdeskNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def _malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        details: List[str] = []
        for error in exc.errors():
            if error.get("type") == "json_invalid":
                message = "Request body must be valid JSON"
            else:
                message = str(error.get("msg", "Invalid request"))
            if message not in details:
                details.append(message)
        return JSONResponse(status_code=400, content={"error": VALIDATION_FAILED, "details": details})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(
    config: Optional[TaskdeskConfig] = None,
    service: Optional[TaskService] = None,
    file_logger: Optional[FileLogger] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        config:      Loaded configuration. Defaults to ``get_config()``.
        service:     Pre-built service (tests). Built from ``config.database``
                     when omitted.
        file_logger: Structured request/record log. Built from
                     ``config.logging`` when omitted and enabled.
    """
    config = config or get_config()

    if file_logger is None and config.logging.request_log:
        file_logger = FileLogger(config.logging.directory)

    if service is None:
        session_factory = init_db(
            config.database.url,
            create_tables=config.database.create_tables,
            echo=config.database.echo,
        )
        service = TaskService(TaskStore(session_factory, file_logger))

    app = FastAPI(
        title=config.name,
        description="Task tracking API — create, list, update and delete tasks",
        version=config.version,
    )
    app.state.task_service = service
    app.state.file_logger = file_logger

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "%s %s -> %s (%.1f ms)",
            request.method, request.url.path, response.status_code, duration_ms,
        )
        if file_logger is not None:
            client = request.client.host if request.client else None
            file_logger.write(
                log_api_request(
                    request.method, request.url.path, response.status_code, duration_ms, client
                )
            )
        return response

    _register_error_handlers(app)
    app.include_router(router, prefix=config.api.prefix)

    @app.get("/health")
    def health_check() -> Dict[str, str]:
        """Public liveness check."""
        return liveness_payload()

    @app.get("/ready")
    def readiness_check() -> JSONResponse:
        """Database readiness check."""
        result = check_database(service.store.session_factory)
        healthy = result.status == HealthStatus.HEALTHY
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "ready" if healthy else "unavailable",
                "database": result.status.value,
                "checks": [result.to_dict()],
            },
        )

    if file_logger is not None:
        file_logger.write(log_system_event("api_created", prefix=config.api.prefix))
    logger.info("Task API ready (prefix=%s)", config.api.prefix or "/")
    return app


def run_server(config: Optional[TaskdeskConfig] = None) -> None:
    """Serve the API with uvicorn on the configured host/port."""
    import uvicorn

    config = config or get_config()
    uvicorn.run(create_app(config), host=config.api.host, port=config.api.port)
