"""Task endpoints: create, list, complete, status changes, template spawning."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.api.deps import get_actor, get_task_service
from src.api.schemas import (
    TaskComplete,
    TaskCreate,
    TaskFromTemplate,
    TaskOut,
    TaskStatusUpdate,
)
from src.core.authorization import Actor
from src.core.task_service import TaskService

router = APIRouter()
templates_router = APIRouter()


@router.post("", response_model=TaskOut)
async def create_task(
    payload: TaskCreate,
    actor: Actor = Depends(get_actor),
    service: TaskService = Depends(get_task_service),
) -> TaskOut:
    task = await service.create(
        actor,
        title=payload.title,
        assigned_to=payload.assigned_to,
        estimated_minutes=payload.estimated_minutes,
        deadline=payload.deadline,
        description=payload.description,
    )
    return TaskOut.model_validate(task)


@router.get("", response_model=list[TaskOut])
async def household_tasks(
    actor: Actor = Depends(get_actor),
    service: TaskService = Depends(get_task_service),
) -> list[TaskOut]:
    tasks = await service.list_for_household(actor)
    return [TaskOut.model_validate(t) for t in tasks]


@router.get("/assigned", response_model=list[TaskOut])
async def assigned_tasks(
    actor: Actor = Depends(get_actor),
    service: TaskService = Depends(get_task_service),
) -> list[TaskOut]:
    tasks = await service.list_for_user(actor.id)
    return [TaskOut.model_validate(t) for t in tasks]


@router.put("/{task_id}/complete", response_model=TaskOut)
async def complete_task(
    task_id: str,
    payload: TaskComplete,
    actor: Actor = Depends(get_actor),
    service: TaskService = Depends(get_task_service),
) -> TaskOut:
    task = await service.complete(actor, task_id, payload.actual_minutes)
    return TaskOut.model_validate(task)


@router.put("/{task_id}/status", response_model=TaskOut)
async def update_task_status(
    task_id: str,
    payload: TaskStatusUpdate,
    actor: Actor = Depends(get_actor),
    service: TaskService = Depends(get_task_service),
) -> TaskOut:
    task = await service.set_status(actor, task_id, payload.status)
    return TaskOut.model_validate(task)


@templates_router.post("/{template_id}/create-task", response_model=TaskOut)
async def create_task_from_template(
    template_id: str,
    payload: TaskFromTemplate,
    actor: Actor = Depends(get_actor),
    service: TaskService = Depends(get_task_service),
) -> TaskOut:
    task = await service.create_from_template(actor, template_id, payload.assigned_to)
    return TaskOut.model_validate(task)
