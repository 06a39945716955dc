"""Authorization capability handed to every lifecycle operation.

An Actor wraps the calling user as loaded from storage at request time. Role
and household checks live here so services never re-derive them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.core.errors import AuthorizationError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from src.data.models import User
    from src.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    user: User

    @classmethod
    def load(cls, storage: StoragePort, user_id: str) -> Actor:
        user = storage.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return cls(user)

    @property
    def id(self) -> str:
        return self.user.id

    @property
    def household_id(self) -> str | None:
        return self.user.household_id

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin

    def require_household(self) -> str:
        """Return the actor's household id; unaffiliated users cannot act."""
        if self.user.household_id is None:
            raise ValidationError("You must join a household first")
        return self.user.household_id

    def require_admin(self, action: str) -> str:
        """Return the household the actor administers."""
        if not self.user.is_admin:
            logger.warning("User %s denied: %s requires admin", self.id, action)
            raise AuthorizationError(f"Only admins can {action}")
        return self.user.household_id  # type: ignore[return-value]

    def require_member_of(self, household_id: str) -> None:
        if self.user.household_id != household_id:
            logger.warning(
                "User %s denied: not a member of household %s", self.id, household_id,
            )
            raise AuthorizationError("Not a member of this household")

    def require_admin_of(self, household_id: str, action: str) -> None:
        self.require_admin(action)
        self.require_member_of(household_id)
