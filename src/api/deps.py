"""FastAPI dependencies: shared services and the calling user."""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request, status

from src.core.authorization import Actor
from src.core.task_service import TaskService
from src.core.time_log_service import TimeLogService
from src.ports.storage_port import StoragePort


def get_storage(request: Request) -> StoragePort:
    return request.app.state.storage


def get_time_log_service(request: Request) -> TimeLogService:
    return request.app.state.time_log_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_actor(
    x_user_id: str | None = Header(default=None),
    storage: StoragePort = Depends(get_storage),
) -> Actor:
    """Resolve the caller from the X-User-Id header set by the session layer."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    user = storage.get_user(x_user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return Actor(user)
