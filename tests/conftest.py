"""Shared test fixtures and configuration.

Sets up environment variables before any src import so src.config sees
deterministic values, and provides temp-file SQLite fixtures.
"""

import os

# Patch env vars BEFORE any src imports
os.environ.setdefault("DATABASE_PATH", ":memory:")
os.environ.setdefault("DEFAULT_DAILY_TARGET_MINUTES", "60")
os.environ.setdefault("TIMEZONE", "Europe/Berlin")
os.environ.setdefault("CORS_ORIGINS", "")

from dataclasses import dataclass

import pytest


@pytest.fixture
def tmp_db_path(tmp_path):
    """Return a temporary SQLite DB path."""
    return str(tmp_path / "test_chorelog.db")


@pytest.fixture
def storage(tmp_db_path):
    """Return a SQLiteStorage backed by a temp file."""
    from src.data.storage import SQLiteStorage
    return SQLiteStorage(db_path=tmp_db_path)


@pytest.fixture
def user_db(storage):
    return storage.users


@pytest.fixture
def task_db(storage):
    return storage.tasks


@pytest.fixture
def time_log_db(storage):
    return storage.time_logs


@pytest.fixture
def notification_db(storage):
    return storage.notifications


@dataclass
class Home:
    """A seeded household: one admin, one member, one guest."""

    household: object
    admin: object
    member: object
    guest: object


@pytest.fixture
def home(storage):
    users = storage.users
    admin = users.add_user(first_name="Anna", last_name="Berg", email="anna@example.com")
    household = users.create_household("Berg family", created_by=admin.id)
    member = users.add_user(first_name="Ben", daily_target_minutes=None)
    users.join_household(member.id, household.id)
    guest = users.join_household_as_guest(household.invite_code, "Cleo")
    return Home(
        household=household,
        admin=users.get_user(admin.id),
        member=users.get_user(member.id),
        guest=guest,
    )


@pytest.fixture
def actors(storage, home):
    """Actor capability objects for the seeded household."""
    from src.core.authorization import Actor

    return {
        "admin": Actor.load(storage, home.admin.id),
        "member": Actor.load(storage, home.member.id),
        "guest": Actor.load(storage, home.guest.id),
    }


@pytest.fixture
def time_log_service(storage):
    from src.core.time_log_service import TimeLogService
    return TimeLogService(storage)
