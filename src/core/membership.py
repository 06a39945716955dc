"""Household membership operations that need an authorization check.

Joining and household creation are storage primitives; reading a household
is limited to its members and removal is an admin action scoped to the
admin's own household.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.core.errors import AuthorizationError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from src.core.authorization import Actor
    from src.data.models import Household, User
    from src.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)


def get_household(storage: StoragePort, actor: Actor, household_id: str) -> Household:
    household = storage.get_household(household_id)
    if household is None:
        raise NotFoundError(f"Household {household_id} not found")
    actor.require_member_of(household_id)
    return household


def list_members(storage: StoragePort, actor: Actor, household_id: str) -> list[User]:
    """Members of ``household_id``, oldest first. Only its members may look."""
    get_household(storage, actor, household_id)
    return storage.list_household_members(household_id)


def remove_member(storage: StoragePort, actor: Actor, user_id: str) -> None:
    """Demote a member to unaffiliated. The user row and its logs are kept.

    Raises:
        AuthorizationError: the actor is not an admin of the member's household.
        ValidationError: an admin tries to remove themselves.
        NotFoundError: no such user.
    """
    household_id = actor.require_admin("remove members")
    if user_id == actor.id:
        raise ValidationError("Admins cannot remove themselves")
    target = storage.get_user(user_id)
    if target is None:
        raise NotFoundError(f"User {user_id} not found")
    if target.household_id != household_id:
        raise AuthorizationError("User is not a member of this household")

    storage.remove_from_household(user_id)
    logger.info("Admin %s removed %s from household %s", actor.id, user_id, household_id)
