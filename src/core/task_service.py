"""
ChoreLog: Task Lifecycle.

Tasks start ``assigned``; the assignee completes them, then an admin reviews
the completed work. Moves are checked against TRANSITIONS and applied as
conditional updates, so a task can never skip or revisit a state.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING

from src.core import dates
from src.core.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from src.data.models import TaskStatus

if TYPE_CHECKING:
    from src.core.authorization import Actor
    from src.data.models import Task
    from src.ports.notification_port import NotificationPort
    from src.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)


# Edges reachable through set_status. assigned -> completed only via complete().
TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.ASSIGNED: frozenset(),
    TaskStatus.COMPLETED: frozenset({
        TaskStatus.PENDING_APPROVAL, TaskStatus.APPROVED, TaskStatus.REJECTED,
    }),
    TaskStatus.PENDING_APPROVAL: frozenset({TaskStatus.APPROVED, TaskStatus.REJECTED}),
    TaskStatus.APPROVED: frozenset(),
    TaskStatus.REJECTED: frozenset(),
}

TASK_ASSIGNED_TITLE = "New task assigned"
TASK_ASSIGNED_TYPE = "task_assigned"


def can_transition(current: TaskStatus, new: TaskStatus) -> bool:
    return new in TRANSITIONS[current]


def _optional_minutes(value: object, field_name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return value


class TaskService:
    """Create, complete, review and list household tasks."""

    def __init__(
        self, storage: StoragePort, notifier: NotificationPort | None = None,
    ) -> None:
        self._storage = storage
        self._notifier = notifier

    def _get_task(self, task_id: str) -> Task:
        task = self._storage.get_task(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    def _check_assignee(self, assignee_id: str | None, household_id: str) -> None:
        if assignee_id is None:
            return
        assignee = self._storage.get_user(assignee_id)
        if assignee is None:
            raise NotFoundError(f"User {assignee_id} not found")
        if assignee.household_id != household_id:
            raise ValidationError("Assignee is not a member of this household")

    async def create(
        self,
        actor: Actor,
        title: str,
        assigned_to: str | None = None,
        estimated_minutes: int | None = None,
        deadline: str | date | datetime | None = None,
        description: str | None = None,
    ) -> Task:
        """Create a task in the admin's household, initially ``assigned``."""
        actor.require_household()
        household_id = actor.require_admin("create tasks")
        if not title or not title.strip():
            raise ValidationError("title is required")
        estimated_minutes = _optional_minutes(estimated_minutes, "estimatedMinutes")
        self._check_assignee(assigned_to, household_id)
        stored_deadline = dates.parse_log_date(deadline) if deadline else None

        task = self._storage.create_task(
            title=title.strip(),
            household_id=household_id,
            assigned_by=actor.id,
            assigned_to=assigned_to,
            description=description,
            estimated_minutes=estimated_minutes,
            deadline=stored_deadline,
        )
        logger.info("Admin %s created task %s for %s", actor.id, task.id, assigned_to)
        return task

    async def complete(
        self, actor: Actor, task_id: str, actual_minutes: int | None = None,
    ) -> Task:
        """Mark a task done, recording how long it took.

        Only the assignee may complete an assigned task; an unassigned task can
        be completed by any member of its household. ``actual_minutes``
        defaults to the estimate.
        """
        task = self._get_task(task_id)
        actor.require_member_of(task.household_id)
        if task.assigned_to is not None and task.assigned_to != actor.id:
            logger.warning("User %s denied: task %s is not assigned to them", actor.id, task_id)
            raise AuthorizationError("Only the assignee can complete this task")
        if task.status != TaskStatus.ASSIGNED:
            raise InvalidTransitionError(f"Task is already {task.status.value}")

        minutes = _optional_minutes(actual_minutes, "actualMinutes")
        if minutes is None:
            minutes = task.estimated_minutes
        if minutes is None:
            raise ValidationError("actualMinutes is required when the task has no estimate")

        completed = self._storage.complete_task(task_id, minutes)
        if completed is None:
            raise InvalidTransitionError("Task was changed concurrently")
        logger.info("Task %s completed by %s in %d min", task_id, actor.id, minutes)
        return completed

    async def set_status(
        self, actor: Actor, task_id: str, status: TaskStatus | str,
    ) -> Task:
        """Admin review of a task; only edges in TRANSITIONS are allowed."""
        actor.require_admin("change task status")
        try:
            new_status = TaskStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Invalid task status: {status!r}") from exc

        task = self._get_task(task_id)
        actor.require_member_of(task.household_id)

        if not can_transition(task.status, new_status):
            logger.warning(
                "Rejected task %s transition %s -> %s",
                task_id, task.status.value, new_status.value,
            )
            raise InvalidTransitionError(
                f"Cannot move task from {task.status.value} to {new_status.value}"
            )

        updated = self._storage.update_task_status(task_id, task.status, new_status, actor.id)
        if updated is None:
            raise InvalidTransitionError("Task was changed concurrently")
        logger.info(
            "Task %s: %s -> %s by %s",
            task_id, task.status.value, new_status.value, actor.id,
        )
        return updated

    async def list_for_household(self, actor: Actor) -> list[Task]:
        household_id = actor.require_household()
        return self._storage.get_tasks_by_household(household_id)

    async def list_for_user(self, assignee_id: str) -> list[Task]:
        return self._storage.get_tasks_by_user(assignee_id)

    async def create_from_template(
        self, actor: Actor, template_id: str, assigned_to: str | None = None,
    ) -> Task:
        """Spawn a task from an active template and tell the assignee.

        The notification is best effort: a failing notifier is logged and
        never undoes the created task.
        """
        template = self._storage.get_task_template(template_id)
        if template is None or not template.is_active:
            raise NotFoundError(f"Template {template_id} not found")
        actor.require_admin_of(template.household_id, "create tasks")
        self._check_assignee(assigned_to, template.household_id)

        task = self._storage.create_task_from_template_row(template_id, assigned_to)
        if task is None:
            # deactivated between the lookup and the insert
            raise NotFoundError(f"Template {template_id} not found")
        logger.info("Task %s created from template %s by %s", task.id, template_id, actor.id)

        if assigned_to is not None and self._notifier is not None:
            try:
                await self._notifier.notify(
                    assigned_to,
                    TASK_ASSIGNED_TITLE,
                    f"You have a new task: {task.title}",
                    TASK_ASSIGNED_TYPE,
                    task.id,
                )
            except Exception as exc:
                logger.error("Failed to notify %s about task %s: %s", assigned_to, task.id, exc)
        return task
