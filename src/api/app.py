"""FastAPI application factory.

Wires storage, notifier and lifecycle services into app.state and maps the
core error taxonomy onto HTTP status codes.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.adapters.db_notifier import DatabaseNotifier
from src.config import settings
from src.core.errors import (
    AuthorizationError,
    ChoreLogError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from src.core.task_service import TaskService
from src.core.time_log_service import TimeLogService
from src.data.storage import SQLiteStorage
from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[ChoreLogError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidTransitionError: status.HTTP_400_BAD_REQUEST,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


def _status_for(exc: ChoreLogError) -> int:
    for cls in type(exc).__mro__:
        if cls in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[cls]
    return status.HTTP_400_BAD_REQUEST


async def _core_error_handler(request: Request, exc: ChoreLogError) -> JSONResponse:
    return JSONResponse(status_code=_status_for(exc), content={"message": exc.message})


async def _request_validation_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


async def _http_error_handler(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


def create_app(
    storage: SQLiteStorage | None = None,
    notifier: NotificationPort | None = None,
) -> FastAPI:
    """Build the API. Defaults to SQLite at DATABASE_PATH with in-app notifications."""
    if storage is None:
        storage = SQLiteStorage()
    if notifier is None:
        notifier = DatabaseNotifier(storage.notifications, storage.users)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting ChoreLog API...")
        yield
        logger.info("Shutting down ChoreLog API...")

    app = FastAPI(
        title="ChoreLog",
        description="Household chore time tracking with admin approval",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.storage = storage
    app.state.time_log_service = TimeLogService(storage)
    app.state.task_service = TaskService(storage, notifier)

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ChoreLogError, _core_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    from src.api import health, households, notifications, progress, tasks, time_logs, users

    app.include_router(health.router, tags=["health"])
    app.include_router(time_logs.router, prefix="/api/time-logs", tags=["time-logs"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(
        tasks.templates_router, prefix="/api/task-templates", tags=["task-templates"],
    )
    app.include_router(progress.router, prefix="/api/progress", tags=["progress"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(households.router, prefix="/api/households", tags=["households"])
    app.include_router(
        notifications.router, prefix="/api/notifications", tags=["notifications"],
    )
    return app
