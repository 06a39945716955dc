"""Notification endpoint: the caller's stored notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from src.api.deps import get_actor, get_storage
from src.api.schemas import NotificationOut
from src.core.authorization import Actor
from src.ports.storage_port import StoragePort

router = APIRouter()


@router.get("", response_model=list[NotificationOut])
async def my_notifications(
    unread_only: bool = Query(default=False, alias="unreadOnly"),
    actor: Actor = Depends(get_actor),
    storage: StoragePort = Depends(get_storage),
) -> list[NotificationOut]:
    """Newest first, at most 50."""
    notes = storage.get_notifications(actor.id, unread_only)
    return [NotificationOut.model_validate(n) for n in notes]
