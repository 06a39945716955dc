"""
ChoreLog: Daily Progress Aggregator.

Progress is derived on every call from the user's time logs for the day and
is never cached, so it cannot drift from the log set. Approved minutes count
as completed, pending minutes are reported separately, rejected minutes are
ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import TYPE_CHECKING

from src.config import settings
from src.core import dates
from src.core.errors import AuthorizationError, NotFoundError, ValidationError
from src.data.models import DailyProgress, TimeLogStatus

if TYPE_CHECKING:
    from src.core.authorization import Actor
    from src.data.models import TimeLog, User
    from src.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)


def target_minutes_for(user: User | None) -> int:
    """The user's daily target, falling back to the configured default."""
    if user is None or not user.daily_target_minutes:
        return settings.DEFAULT_DAILY_TARGET_MINUTES
    return user.daily_target_minutes


def summarize_day(
    logs: Iterable[TimeLog], day: date, target_minutes: int,
) -> DailyProgress:
    """Pure aggregation over a log set; logs outside ``day`` are skipped."""
    start, end = dates.day_bounds(day)
    completed = 0
    pending = 0
    for log in logs:
        if not start <= log.log_date <= end:
            continue
        if log.status == TimeLogStatus.APPROVED:
            completed += log.minutes
        elif log.status == TimeLogStatus.PENDING_APPROVAL:
            pending += log.minutes
    return DailyProgress(
        completed_minutes=completed,
        target_minutes=target_minutes,
        pending_minutes=pending,
    )


def get_daily_progress(
    storage: StoragePort, user_id: str, day: str | date | None = None,
) -> DailyProgress:
    """Completed, target and pending minutes for one user on one day.

    Args:
        storage: Persistence gateway to read the user and logs from.
        user_id: Whose progress to compute.
        day: Calendar date (``date`` or ISO string); None means today.

    Raises:
        NotFoundError: the user does not exist.
    """
    user = storage.get_user(user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")

    target_day = dates.parse_day(day)
    start, end = dates.day_bounds(target_day)
    logs = storage.get_time_logs_by_user(user_id, start, end)
    progress = summarize_day(logs, target_day, target_minutes_for(user))
    logger.debug(
        "Progress for %s on %s: %d/%d (+%d pending)",
        user_id, target_day, progress.completed_minutes,
        progress.target_minutes, progress.pending_minutes,
    )
    return progress


def set_daily_target(
    storage: StoragePort, actor: Actor, user_id: str, minutes: int,
) -> User:
    """Admin sets a member's daily target (minutes >= 1)."""
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 1:
        raise ValidationError("dailyTargetMinutes must be at least 1")
    household_id = actor.require_admin("set daily targets")
    target = storage.get_user(user_id)
    if target is None:
        raise NotFoundError(f"User {user_id} not found")
    if target.household_id != household_id:
        raise AuthorizationError("User is not a member of this household")

    updated = storage.update_daily_target(user_id, minutes)
    if updated is None:
        raise NotFoundError(f"User {user_id} not found")
    return updated
