"""Daily progress endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.api.deps import get_actor, get_storage
from src.api.schemas import DailyProgressOut
from src.core import progress as progress_core
from src.core.authorization import Actor
from src.ports.storage_port import StoragePort

router = APIRouter()


@router.get("/daily", response_model=DailyProgressOut)
async def daily_progress(
    date: str | None = None,
    actor: Actor = Depends(get_actor),
    storage: StoragePort = Depends(get_storage),
) -> DailyProgressOut:
    """Completed/target/pending minutes for the caller; defaults to today."""
    result = progress_core.get_daily_progress(storage, actor.id, date)
    return DailyProgressOut.model_validate(result)
