"""
ChoreLog: Data Models.

Users, households, tasks and time logs persist in SQLite. Progress figures
are never stored here; they are derived from the time logs on every read.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Household-scoped role. Meaningless while a user has no household."""

    ADMIN = "admin"
    MEMBER = "member"


class TimeLogStatus(str, Enum):
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"


class TaskStatus(str, Enum):
    ASSIGNED = "assigned"
    COMPLETED = "completed"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass
class User:
    """A household participant (full account or guest)."""

    id: str
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    household_id: str | None = None       # None while unaffiliated
    role: Role = Role.MEMBER
    daily_target_minutes: int | None = 60
    is_guest: bool = False
    created_at: str = ""

    @property
    def is_admin(self) -> bool:
        return self.household_id is not None and self.role == Role.ADMIN

    @property
    def name(self) -> str:
        """Best human-readable name: display name, else first/last name."""
        if self.display_name:
            return self.display_name
        full = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full or self.id


@dataclass
class Household:
    """The tenancy boundary. The invite code is fixed at creation."""

    id: str
    name: str
    invite_code: str                      # 8 upper-case hex characters
    created_by: str
    created_at: str = ""


@dataclass
class Task:
    """An assignable unit of work scoped to one household."""

    id: str
    title: str
    household_id: str
    status: TaskStatus = TaskStatus.ASSIGNED
    description: str | None = None
    assigned_to: str | None = None
    assigned_by: str | None = None
    estimated_minutes: int | None = None
    actual_minutes: int | None = None     # set only on completion
    deadline: str | None = None           # ISO datetime
    completed_at: str | None = None
    reviewed_by: str | None = None
    template_id: str | None = None
    is_from_template: bool = False
    created_at: str = ""
    updated_at: str = ""


@dataclass
class TaskTemplate:
    """Blueprint a task can be spawned from. Inactive templates are hidden."""

    id: str
    title: str
    household_id: str
    created_by: str
    estimated_minutes: int
    recurrence: str = "weekly"            # daily | weekly | monthly
    description: str | None = None
    priority: str = "medium"
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""


@dataclass
class TimeLog:
    """Minutes worked on a calendar date, subject to admin approval."""

    id: str
    user_id: str
    household_id: str
    title: str
    minutes: int
    log_date: str                         # naive local ISO datetime, ms precision
    status: TimeLogStatus = TimeLogStatus.PENDING_APPROVAL
    description: str | None = None
    task_id: str | None = None
    reviewed_by: str | None = None
    reviewed_at: str | None = None
    created_at: str = ""


@dataclass
class SubmitterIdentity:
    """Minimal identity of whoever submitted a time log (admin review queues)."""

    id: str
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_guest: bool = False


@dataclass
class TimeLogWithSubmitter:
    time_log: TimeLog
    user: SubmitterIdentity | None = None


@dataclass
class Notification:
    id: str
    title: str
    message: str
    type: str                             # e.g. "task_assigned"
    user_id: str
    household_id: str
    related_id: str | None = None
    is_read: bool = False
    created_at: str = ""


@dataclass
class DailyProgress:
    """Derived per-user, per-day figure. Never persisted."""

    completed_minutes: int = 0
    target_minutes: int = 60
    pending_minutes: int = 0
