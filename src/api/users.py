"""User endpoints: daily target."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.api.deps import get_actor, get_storage
from src.api.schemas import DailyTargetUpdate, UserOut
from src.core import progress as progress_core
from src.core.authorization import Actor
from src.ports.storage_port import StoragePort

router = APIRouter()


@router.put("/daily-target", response_model=UserOut)
async def update_daily_target(
    payload: DailyTargetUpdate,
    actor: Actor = Depends(get_actor),
    storage: StoragePort = Depends(get_storage),
) -> UserOut:
    user = progress_core.set_daily_target(
        storage, actor, payload.user_id, payload.daily_target_minutes,
    )
    return UserOut.model_validate(user)
