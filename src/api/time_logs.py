"""Time log endpoints: submit, list, review."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from src.api.deps import get_actor, get_time_log_service
from src.api.schemas import (
    HouseholdTimeLogOut,
    SubmitterOut,
    TimeLogCreate,
    TimeLogOut,
    TimeLogReview,
)
from src.core.authorization import Actor
from src.core.time_log_service import TimeLogService

router = APIRouter()


@router.post("", response_model=TimeLogOut)
async def submit_time_log(
    payload: TimeLogCreate,
    actor: Actor = Depends(get_actor),
    service: TimeLogService = Depends(get_time_log_service),
) -> TimeLogOut:
    """Log minutes; admins are approved immediately, members wait for review."""
    time_log = await service.submit(
        actor,
        title=payload.title,
        minutes=payload.minutes,
        log_date=payload.log_date,
        description=payload.description,
        task_id=payload.task_id,
    )
    return TimeLogOut.model_validate(time_log)


@router.get("/my", response_model=list[TimeLogOut])
async def my_time_logs(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    actor: Actor = Depends(get_actor),
    service: TimeLogService = Depends(get_time_log_service),
) -> list[TimeLogOut]:
    logs = await service.list_for_user(actor.id, start_date, end_date)
    return [TimeLogOut.model_validate(log) for log in logs]


@router.get("", response_model=list[HouseholdTimeLogOut])
async def household_time_logs(
    actor: Actor = Depends(get_actor),
    service: TimeLogService = Depends(get_time_log_service),
) -> list[HouseholdTimeLogOut]:
    """Admin review queue with submitter identity."""
    rows = await service.list_for_household(actor)
    return [
        HouseholdTimeLogOut(
            **TimeLogOut.model_validate(row.time_log).model_dump(),
            user=SubmitterOut.model_validate(row.user) if row.user else None,
        )
        for row in rows
    ]


@router.put("/{time_log_id}/review", response_model=TimeLogOut)
async def review_time_log(
    time_log_id: str,
    payload: TimeLogReview,
    actor: Actor = Depends(get_actor),
    service: TimeLogService = Depends(get_time_log_service),
) -> TimeLogOut:
    time_log = await service.review(actor, time_log_id, payload.status)
    return TimeLogOut.model_validate(time_log)
