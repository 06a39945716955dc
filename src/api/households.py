"""Household endpoints: details, member list, member removal."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.api.deps import get_actor, get_storage
from src.api.schemas import HouseholdOut, MemberRemovedOut, UserOut
from src.core import membership
from src.core.authorization import Actor
from src.ports.storage_port import StoragePort

router = APIRouter()


@router.get("/{household_id}", response_model=HouseholdOut)
async def get_household(
    household_id: str,
    actor: Actor = Depends(get_actor),
    storage: StoragePort = Depends(get_storage),
) -> HouseholdOut:
    household = membership.get_household(storage, actor, household_id)
    return HouseholdOut.model_validate(household)


@router.get("/{household_id}/members", response_model=list[UserOut])
async def household_members(
    household_id: str,
    actor: Actor = Depends(get_actor),
    storage: StoragePort = Depends(get_storage),
) -> list[UserOut]:
    members = membership.list_members(storage, actor, household_id)
    return [UserOut.model_validate(u) for u in members]


@router.delete("/members/{user_id}", response_model=MemberRemovedOut)
async def remove_household_member(
    user_id: str,
    actor: Actor = Depends(get_actor),
    storage: StoragePort = Depends(get_storage),
) -> MemberRemovedOut:
    """Admin only; the member is demoted, never deleted."""
    membership.remove_member(storage, actor, user_id)
    return MemberRemovedOut(message="Member removed")
