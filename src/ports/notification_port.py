"""Notification port: abstract interface for telling a user something happened.

Core modules depend on this protocol, never on a specific delivery channel.
"""

from __future__ import annotations

from typing import Protocol


class NotificationPort(Protocol):
    """Abstract notification interface used by core modules."""

    async def notify(
        self,
        user_id: str,
        title: str,
        message: str,
        type: str,
        related_id: str | None = None,
    ) -> None: ...
