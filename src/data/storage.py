"""
ChoreLog: SQLite persistence gateway.

Implements StoragePort by composing the table classes in src.data.db over one
database file. The table objects stay reachable for the membership and
template operations the lifecycle services do not need.
"""

from __future__ import annotations

import logging

from src.data.db import NotificationDB, TaskDB, TimeLogDB, UserDB
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

logger = logging.getLogger(__name__)


class SQLiteStorage:
    """SQLite implementation of StoragePort."""

    def __init__(self, db_path: str | None = None) -> None:
        if db_path is None:
            from src.config import settings
            db_path = settings.DATABASE_PATH

        self.users = UserDB(db_path)
        self.tasks = TaskDB(db_path)
        self.time_logs = TimeLogDB(db_path)
        self.notifications = NotificationDB(db_path)
        logger.info("Storage ready db=%s", db_path)

    # ---- users ----

    def get_user(self, user_id: str) -> User | None:
        return self.users.get_user(user_id)

    def update_daily_target(self, user_id: str, minutes: int) -> User | None:
        return self.users.set_daily_target(user_id, minutes)

    def get_household(self, household_id: str) -> Household | None:
        return self.users.get_household(household_id)

    def list_household_members(self, household_id: str) -> list[User]:
        return self.users.list_household_members(household_id)

    def remove_from_household(self, user_id: str) -> bool:
        return self.users.remove_from_household(user_id)

    # ---- time logs ----

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
    ) -> TimeLog:
        return self.time_logs.add(
            user_id=user_id,
            household_id=household_id,
            title=title,
            minutes=minutes,
            log_date=log_date,
            status=status,
            description=description,
            task_id=task_id,
            reviewed_by=reviewed_by,
            reviewed_at=reviewed_at,
        )

    def get_time_log(self, time_log_id: str) -> TimeLog | None:
        return self.time_logs.get(time_log_id)

    def get_time_logs_by_user(
        self, user_id: str, start: str | None = None, end: str | None = None,
    ) -> list[TimeLog]:
        return self.time_logs.list_by_user(user_id, start, end)

    def get_time_logs_by_household(self, household_id: str) -> list[TimeLogWithSubmitter]:
        return self.time_logs.list_by_household(household_id)

    def review_time_log(
        self, time_log_id: str, status: TimeLogStatus, reviewer_id: str,
    ) -> TimeLog | None:
        return self.time_logs.review(time_log_id, status, reviewer_id)

    # ---- tasks ----

    def create_task(
        self,
        title: str,
        household_id: str,
        assigned_by: str | None = None,
        assigned_to: str | None = None,
        description: str | None = None,
        estimated_minutes: int | None = None,
        deadline: str | None = None,
    ) -> Task:
        return self.tasks.create_task(
            title=title,
            household_id=household_id,
            assigned_by=assigned_by,
            assigned_to=assigned_to,
            description=description,
            estimated_minutes=estimated_minutes,
            deadline=deadline,
        )

    def get_task(self, task_id: str) -> Task | None:
        return self.tasks.get_task(task_id)

    def get_tasks_by_household(self, household_id: str) -> list[Task]:
        return self.tasks.list_by_household(household_id)

    def get_tasks_by_user(self, assignee_id: str) -> list[Task]:
        return self.tasks.list_by_assignee(assignee_id)

    def update_task_status(
        self,
        task_id: str,
        expected: TaskStatus,
        status: TaskStatus,
        reviewer_id: str | None = None,
    ) -> Task | None:
        return self.tasks.update_status(task_id, expected, status, reviewer_id)

    def complete_task(self, task_id: str, actual_minutes: int) -> Task | None:
        return self.tasks.complete(task_id, actual_minutes)

    # ---- templates ----

    def get_task_template(self, template_id: str) -> TaskTemplate | None:
        return self.tasks.get_template(template_id)

    def create_task_from_template_row(
        self, template_id: str, assigned_to: str | None = None,
    ) -> Task | None:
        return self.tasks.create_from_template(template_id, assigned_to)

    # ---- notifications ----

    def get_notifications(
        self, user_id: str, unread_only: bool = False,
    ) -> list[Notification]:
        return self.notifications.list_for_user(user_id, unread_only)
