"""Database notification adapter: implements NotificationPort.

Stores an unread notification row for the recipient; clients poll for them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.data.db import NotificationDB, UserDB

logger = logging.getLogger(__name__)


class DatabaseNotifier:
    """SQLite implementation of NotificationPort."""

    def __init__(self, notification_db: NotificationDB, user_db: UserDB) -> None:
        self._notifications = notification_db
        self._users = user_db

    async def notify(
        self,
        user_id: str,
        title: str,
        message: str,
        type: str,
        related_id: str | None = None,
    ) -> None:
        user = self._users.get_user(user_id)
        if user is None or user.household_id is None:
            raise ValueError(f"Cannot notify user {user_id}: no household")
        self._notifications.add(
            user_id=user_id,
            household_id=user.household_id,
            title=title,
            message=message,
            type=type,
            related_id=related_id,
        )
