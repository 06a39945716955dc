"""
ChoreLog: Time Log Lifecycle.

A time log moves pending_approval -> approved | rejected and never leaves a
terminal state. Admins are the only reviewers, so their own submissions are
approved on creation with themselves as reviewer; everyone else, guests
included, waits for review.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING

from src.core import dates
from src.core.errors import InvalidTransitionError, NotFoundError, ValidationError
from src.data.models import TimeLogStatus

if TYPE_CHECKING:
    from src.core.authorization import Actor
    from src.data.models import TimeLog, TimeLogWithSubmitter
    from src.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)

REVIEW_OUTCOMES = frozenset({TimeLogStatus.APPROVED, TimeLogStatus.REJECTED})


def _check_minutes(minutes: object) -> int:
    # bool is an int subclass
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0:
        raise ValidationError("minutes must be a positive integer")
    return minutes


class TimeLogService:
    """Submit, review and list time logs."""

    def __init__(self, storage: StoragePort) -> None:
        self._storage = storage

    async def submit(
        self,
        actor: Actor,
        title: str,
        minutes: int,
        log_date: str | date | datetime,
        description: str | None = None,
        task_id: str | None = None,
    ) -> TimeLog:
        """Record minutes worked on ``log_date`` for the acting user.

        Raises:
            ValidationError: non-positive minutes, empty title, bad date, or
                the actor has no household.
            NotFoundError: ``task_id`` does not name a task of the household.
        """
        household_id = actor.require_household()
        minutes = _check_minutes(minutes)
        if not title or not title.strip():
            raise ValidationError("title is required")
        stored_date = dates.parse_log_date(log_date)

        if task_id is not None:
            task = self._storage.get_task(task_id)
            if task is None or task.household_id != household_id:
                raise NotFoundError(f"Task {task_id} not found")

        if actor.is_admin:
            status = TimeLogStatus.APPROVED
            reviewed_by: str | None = actor.id
            reviewed_at: str | None = dates.now_iso()
        else:
            status = TimeLogStatus.PENDING_APPROVAL
            reviewed_by = None
            reviewed_at = None

        time_log = self._storage.create_time_log(
            user_id=actor.id,
            household_id=household_id,
            title=title.strip(),
            minutes=minutes,
            log_date=stored_date,
            status=status,
            description=description,
            task_id=task_id,
            reviewed_by=reviewed_by,
            reviewed_at=reviewed_at,
        )
        logger.info(
            "User %s logged %d min '%s' for %s -> %s",
            actor.id, minutes, time_log.title, stored_date[:10], status.value,
        )
        return time_log

    async def review(
        self, actor: Actor, time_log_id: str, status: TimeLogStatus | str,
    ) -> TimeLog:
        """Approve or reject a pending log.

        The update is conditional on the log still being pending, so of two
        concurrent reviews exactly one wins; the other sees
        InvalidTransitionError.
        """
        actor.require_admin("review time logs")
        try:
            status = TimeLogStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Invalid review status: {status!r}") from exc
        if status not in REVIEW_OUTCOMES:
            raise ValidationError("Review status must be 'approved' or 'rejected'")

        current = self._storage.get_time_log(time_log_id)
        if current is None:
            raise NotFoundError(f"Time log {time_log_id} not found")
        actor.require_member_of(current.household_id)

        if current.status != TimeLogStatus.PENDING_APPROVAL:
            logger.warning(
                "Rejected review of time log %s: already %s", time_log_id, current.status.value,
            )
            raise InvalidTransitionError(f"Time log is already {current.status.value}")

        reviewed = self._storage.review_time_log(time_log_id, status, actor.id)
        if reviewed is None:
            latest = self._storage.get_time_log(time_log_id)
            state = latest.status.value if latest else "gone"
            logger.warning("Lost review race on time log %s (now %s)", time_log_id, state)
            raise InvalidTransitionError(f"Time log is already {state}")
        return reviewed

    async def list_for_user(
        self,
        user_id: str,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
    ) -> list[TimeLog]:
        """Logs of one user, newest ``log_date`` first.

        Each bound is inclusive and whole-day: ``end_date`` covers its day
        through 23:59:59.999.
        """
        start = dates.day_bounds(dates.parse_day(start_date))[0] if start_date else None
        end = dates.day_bounds(dates.parse_day(end_date))[1] if end_date else None
        if start and end and start > end:
            raise ValidationError("startDate must not be after endDate")
        return self._storage.get_time_logs_by_user(user_id, start, end)

    async def list_for_household(self, actor: Actor) -> list[TimeLogWithSubmitter]:
        """Review queue for the actor's household, newest submission first."""
        household_id = actor.require_admin("view all time logs")
        return self._storage.get_time_logs_by_household(household_id)
