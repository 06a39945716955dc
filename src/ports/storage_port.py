"""Storage port: the persistence gateway the lifecycle services run against.

Status-changing methods are compare-and-set: they return None when the row
is missing or no longer in the state the caller expected.
"""

from __future__ import annotations

from typing import Protocol

from src.data.models import (
    Household,
    Notification,
    Task,
    TaskStatus,
    TaskTemplate,
    TimeLog,
    TimeLogStatus,
    TimeLogWithSubmitter,
    User,
)


class StoragePort(Protocol):
    """Abstract persistence interface used by core modules."""

    # Users
    def get_user(self, user_id: str) -> User | None: ...

    def update_daily_target(self, user_id: str, minutes: int) -> User | None: ...

    def get_household(self, household_id: str) -> Household | None: ...

    def list_household_members(self, household_id: str) -> list[User]: ...

    def remove_from_household(self, user_id: str) -> bool: ...

    # Time logs
    def create_time_log(
        self,
        user_id: str,
        household_id: str,
        title: str,
        minutes: int,
        log_date: str,
        status: TimeLogStatus,
        description: str | None = None,
        task_id: str | None = None,
        reviewed_by: str | None = None,
        reviewed_at: str | None = None,
    ) -> TimeLog: ...

    def get_time_log(self, time_log_id: str) -> TimeLog | None: ...

    def get_time_logs_by_user(
        self, user_id: str, start: str | None = None, end: str | None = None,
    ) -> list[TimeLog]: ...

    def get_time_logs_by_household(self, household_id: str) -> list[TimeLogWithSubmitter]: ...

    def review_time_log(
        self, time_log_id: str, status: TimeLogStatus, reviewer_id: str,
    ) -> TimeLog | None: ...

    # Tasks
    def create_task(
        self,
        title: str,
        household_id: str,
        assigned_by: str | None = None,
        assigned_to: str | None = None,
        description: str | None = None,
        estimated_minutes: int | None = None,
        deadline: str | None = None,
    ) -> Task: ...

    def get_task(self, task_id: str) -> Task | None: ...

    def get_tasks_by_household(self, household_id: str) -> list[Task]: ...

    def get_tasks_by_user(self, assignee_id: str) -> list[Task]: ...

    def update_task_status(
        self,
        task_id: str,
        expected: TaskStatus,
        status: TaskStatus,
        reviewer_id: str | None = None,
    ) -> Task | None: ...

    def complete_task(self, task_id: str, actual_minutes: int) -> Task | None: ...

    # Templates
    def get_task_template(self, template_id: str) -> TaskTemplate | None: ...

    def create_task_from_template_row(
        self, template_id: str, assigned_to: str | None = None,
    ) -> Task | None: ...

    # Notifications
    def get_notifications(
        self, user_id: str, unread_only: bool = False,
    ) -> list[Notification]: ...
