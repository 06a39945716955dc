"""Tests for src.data.models — dataclasses and enums."""

from dataclasses import asdict

from src.data.models import (
    DailyProgress,
    Role,
    Task,
    TaskStatus,
    TimeLog,
    TimeLogStatus,
    User,
)


def test_user_defaults():
    user = User(id="u1")
    assert user.household_id is None
    assert user.role == Role.MEMBER
    assert user.daily_target_minutes == 60
    assert user.is_guest is False


def test_admin_role_requires_household():
    """Role is scoped to membership: an unaffiliated 'admin' is not an admin."""
    assert User(id="u1", role=Role.ADMIN, household_id="h1").is_admin is True
    assert User(id="u1", role=Role.ADMIN, household_id=None).is_admin is False
    assert User(id="u1", role=Role.MEMBER, household_id="h1").is_admin is False


def test_user_name_prefers_display_name():
    assert User(id="u1", display_name="Cleo", first_name="C").name == "Cleo"
    assert User(id="u1", first_name="Anna", last_name="Berg").name == "Anna Berg"
    assert User(id="u1").name == "u1"


def test_task_defaults():
    task = Task(id="t1", title="Vacuum", household_id="h1")
    assert task.status == TaskStatus.ASSIGNED
    assert task.actual_minutes is None
    assert task.completed_at is None
    assert task.is_from_template is False


def test_time_log_defaults():
    log = TimeLog(
        id="l1", user_id="u1", household_id="h1", title="Dishes",
        minutes=30, log_date="2025-03-10T00:00:00.000",
    )
    assert log.status == TimeLogStatus.PENDING_APPROVAL
    assert log.reviewed_by is None
    assert log.reviewed_at is None


def test_status_values_match_wire_format():
    assert TimeLogStatus.PENDING_APPROVAL.value == "pending_approval"
    assert TimeLogStatus("approved") is TimeLogStatus.APPROVED
    assert {s.value for s in TaskStatus} == {
        "assigned", "completed", "pending_approval", "approved", "rejected",
    }


def test_daily_progress_serializable():
    d = asdict(DailyProgress(completed_minutes=30, target_minutes=60, pending_minutes=15))
    assert d == {"completed_minutes": 30, "target_minutes": 60, "pending_minutes": 15}
