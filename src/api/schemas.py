"""Request and response bodies for the HTTP API.

Field names are camelCase on the wire and snake_case in Python.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.data.models import Role, TaskStatus, TimeLogStatus


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---- requests ----


class TimeLogCreate(_Schema):
    title: str
    minutes: int
    log_date: str
    description: str | None = None
    task_id: str | None = None


class TimeLogReview(_Schema):
    status: str


class TaskCreate(_Schema):
    title: str
    description: str | None = None
    assigned_to: str | None = None
    estimated_minutes: int | None = None
    deadline: str | None = None


class TaskComplete(_Schema):
    actual_minutes: int | None = None


class TaskStatusUpdate(_Schema):
    status: str


class TaskFromTemplate(_Schema):
    assigned_to: str | None = None


class DailyTargetUpdate(_Schema):
    user_id: str
    daily_target_minutes: int


# ---- responses ----


class TimeLogOut(_Schema):
    id: str
    user_id: str
    household_id: str
    task_id: str | None = None
    title: str
    description: str | None = None
    minutes: int
    status: TimeLogStatus
    log_date: str
    created_at: str
    reviewed_by: str | None = None
    reviewed_at: str | None = None


class SubmitterOut(_Schema):
    id: str
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_guest: bool = False


class HouseholdTimeLogOut(TimeLogOut):
    user: SubmitterOut | None = None


class TaskOut(_Schema):
    id: str
    title: str
    description: str | None = None
    household_id: str
    assigned_to: str | None = None
    assigned_by: str | None = None
    status: TaskStatus
    estimated_minutes: int | None = None
    actual_minutes: int | None = None
    deadline: str | None = None
    completed_at: str | None = None
    reviewed_by: str | None = None
    template_id: str | None = None
    is_from_template: bool = False
    created_at: str
    updated_at: str


class UserOut(_Schema):
    id: str
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    household_id: str | None = None
    role: Role
    daily_target_minutes: int | None = None
    is_guest: bool = False


class DailyProgressOut(_Schema):
    completed_minutes: int
    target_minutes: int
    pending_minutes: int


class HouseholdOut(_Schema):
    id: str
    name: str
    invite_code: str
    created_by: str
    created_at: str


class MemberRemovedOut(_Schema):
    success: bool = True
    message: str


class NotificationOut(_Schema):
    id: str
    title: str
    message: str
    type: str
    user_id: str
    household_id: str
    related_id: str | None = None
    is_read: bool = False
    created_at: str
