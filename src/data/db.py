"""
ChoreLog: SQLite tables.

One class per table group, all sharing a single database file. Every status
change is a conditional UPDATE (``... WHERE id = ? AND status = ?``) so two
concurrent writers can never both move the same row out of the same state;
the loser gets ``None`` back and the lifecycle layer decides what to raise.
"""

from __future__ import annotations

import logging
import secrets
import sqlite3
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from src.config import settings
from src.data.models import (
    Household,
    Notification,
    Role,
    SubmitterIdentity,
    Task,
    TaskStatus,
    TaskTemplate,
    TimeLog,
    TimeLogStatus,
    TimeLogWithSubmitter,
    User,
)

logger = logging.getLogger(__name__)


def _now() -> str:
    """Wall-clock time in TIMEZONE, the same frame log dates are stored in."""
    return datetime.now(settings.tz).replace(tzinfo=None).isoformat(timespec="milliseconds")


def _new_id() -> str:
    return str(uuid.uuid4())


class _SQLiteTable:
    """Connection handling shared by the table classes."""

    def __init__(self, db_path: str | None = None) -> None:
        if db_path is None:
            db_path = settings.DATABASE_PATH

        self._db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._db_path, timeout=30.0)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self) -> None:
        raise NotImplementedError


class UserDB(_SQLiteTable):
    """Users and households."""

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id                   TEXT PRIMARY KEY,
                    display_name         TEXT,
                    first_name           TEXT,
                    last_name            TEXT,
                    email                TEXT UNIQUE,
                    household_id         TEXT,
                    role                 TEXT    NOT NULL DEFAULT 'member',
                    daily_target_minutes INTEGER DEFAULT 60,
                    is_guest             INTEGER NOT NULL DEFAULT 0,
                    created_at           TEXT    NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS households (
                    id          TEXT PRIMARY KEY,
                    name        TEXT NOT NULL,
                    invite_code TEXT NOT NULL UNIQUE,
                    created_by  TEXT NOT NULL,
                    created_at  TEXT NOT NULL
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_users_household ON users(household_id)"
            )
        logger.debug("Users/households tables initialized at %s", self._db_path)

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            display_name=row["display_name"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            household_id=row["household_id"],
            role=Role(row["role"]),
            daily_target_minutes=row["daily_target_minutes"],
            is_guest=bool(row["is_guest"]),
            created_at=row["created_at"],
        )

    @staticmethod
    def _row_to_household(row: sqlite3.Row) -> Household:
        return Household(
            id=row["id"],
            name=row["name"],
            invite_code=row["invite_code"],
            created_by=row["created_by"],
            created_at=row["created_at"],
        )

    def add_user(
        self,
        display_name: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
        household_id: str | None = None,
        role: Role = Role.MEMBER,
        daily_target_minutes: int | None = 60,
        is_guest: bool = False,
        user_id: str | None = None,
    ) -> User:
        """Register a new user, unaffiliated unless household_id is given."""
        user = User(
            id=user_id or _new_id(),
            display_name=display_name,
            first_name=first_name,
            last_name=last_name,
            email=email,
            household_id=household_id,
            role=role,
            daily_target_minutes=daily_target_minutes,
            is_guest=is_guest,
            created_at=_now(),
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO users
                    (id, display_name, first_name, last_name, email, household_id,
                     role, daily_target_minutes, is_guest, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user.id, display_name, first_name, last_name, email,
                    household_id, role.value, daily_target_minutes,
                    int(is_guest), user.created_at,
                ),
            )
        logger.info("User registered: %s '%s'", user.id, user.name)
        return user

    def get_user(self, user_id: str) -> User | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def create_household(self, name: str, created_by: str) -> Household:
        """Create a household and make its creator the admin.

        The invite code is 4 random bytes rendered as 8 upper-case hex
        characters; it never changes afterwards.
        """
        household = Household(
            id=_new_id(),
            name=name,
            invite_code=secrets.token_hex(4).upper(),
            created_by=created_by,
            created_at=_now(),
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO households (id, name, invite_code, created_by, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (household.id, name, household.invite_code, created_by, household.created_at),
            )
            conn.execute(
                "UPDATE users SET household_id = ?, role = ? WHERE id = ?",
                (household.id, Role.ADMIN.value, created_by),
            )
        logger.info("Household created: %s '%s' by %s", household.id, name, created_by)
        return household

    def get_household(self, household_id: str) -> Household | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM households WHERE id = ?", (household_id,)
            ).fetchone()
        if row is None:
            return None
        return self._row_to_household(row)

    def get_household_by_invite_code(self, invite_code: str) -> Household | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM households WHERE invite_code = ?",
                (invite_code.strip().upper(),),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_household(row)

    def list_household_members(self, household_id: str) -> list[User]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM users WHERE household_id = ? ORDER BY created_at",
                (household_id,),
            ).fetchall()
        return [self._row_to_user(r) for r in rows]

    def join_household(self, user_id: str, household_id: str) -> User | None:
        """Move a user into a household as a plain member."""
        with self._connect() as conn:
            conn.execute(
                "UPDATE users SET household_id = ?, role = ? WHERE id = ?",
                (household_id, Role.MEMBER.value, user_id),
            )
        logger.info("User %s joined household %s", user_id, household_id)
        return self.get_user(user_id)

    def join_household_as_guest(self, invite_code: str, display_name: str) -> User | None:
        """Admit a guest by invite code, reusing an existing guest of the same name.

        Returns None when no household has that invite code.
        """
        household = self.get_household_by_invite_code(invite_code)
        if household is None:
            return None

        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT * FROM users
                WHERE display_name = ? AND household_id = ? AND is_guest = 1
                ORDER BY created_at LIMIT 1
                """,
                (display_name, household.id),
            ).fetchone()
        if row is not None:
            logger.info("Guest '%s' rejoined household %s", display_name, household.id)
            return self._row_to_user(row)

        return self.add_user(
            display_name=display_name,
            household_id=household.id,
            role=Role.MEMBER,
            is_guest=True,
        )

    def remove_from_household(self, user_id: str) -> bool:
        """Demote a user to an unaffiliated member. The row is kept."""
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE users SET household_id = NULL, role = ? WHERE id = ?",
                (Role.MEMBER.value, user_id),
            )
        removed = cursor.rowcount > 0
        if removed:
            logger.info("User %s removed from household", user_id)
        return removed

    def set_daily_target(self, user_id: str, minutes: int) -> User | None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE users SET daily_target_minutes = ? WHERE id = ?",
                (minutes, user_id),
            )
        logger.info("Daily target for user %s set to %d min", user_id, minutes)
        return self.get_user(user_id)


class TaskDB(_SQLiteTable):
    """Tasks and the templates they can be spawned from."""

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS tasks (
                    id                TEXT PRIMARY KEY,
                    title             TEXT    NOT NULL,
                    description       TEXT,
                    household_id      TEXT    NOT NULL,
                    assigned_to       TEXT,
                    assigned_by       TEXT,
                    status            TEXT    NOT NULL DEFAULT 'assigned',
                    estimated_minutes INTEGER,
                    actual_minutes    INTEGER,
                    deadline          TEXT,
                    completed_at      TEXT,
                    reviewed_by       TEXT,
                    template_id       TEXT,
                    is_from_template  INTEGER NOT NULL DEFAULT 0,
                    created_at        TEXT    NOT NULL,
                    updated_at        TEXT    NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS task_templates (
                    id                TEXT PRIMARY KEY,
                    title             TEXT    NOT NULL,
                    description       TEXT,
                    estimated_minutes INTEGER NOT NULL,
                    priority          TEXT    NOT NULL DEFAULT 'medium',
                    recurrence        TEXT    NOT NULL,
                    household_id      TEXT    NOT NULL,
                    created_by        TEXT    NOT NULL,
                    is_active         INTEGER NOT NULL DEFAULT 1,
                    created_at        TEXT    NOT NULL,
                    updated_at        TEXT    NOT NULL
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_tasks_household ON tasks(household_id)"
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_tasks_assignee ON tasks(assigned_to)"
            )
        logger.debug("Tasks/templates tables initialized at %s", self._db_path)

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            household_id=row["household_id"],
            assigned_to=row["assigned_to"],
            assigned_by=row["assigned_by"],
            status=TaskStatus(row["status"]),
            estimated_minutes=row["estimated_minutes"],
            actual_minutes=row["actual_minutes"],
            deadline=row["deadline"],
            completed_at=row["completed_at"],
            reviewed_by=row["reviewed_by"],
            template_id=row["template_id"],
            is_from_template=bool(row["is_from_template"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _row_to_template(row: sqlite3.Row) -> TaskTemplate:
        return TaskTemplate(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            estimated_minutes=row["estimated_minutes"],
            priority=row["priority"],
            recurrence=row["recurrence"],
            household_id=row["household_id"],
            created_by=row["created_by"],
            is_active=bool(row["is_active"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _insert_task(conn: sqlite3.Connection, task: Task) -> None:
        conn.execute(
            """
            INSERT INTO tasks
                (id, title, description, household_id, assigned_to, assigned_by,
                 status, estimated_minutes, deadline, template_id,
                 is_from_template, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                task.id, task.title, task.description, task.household_id,
                task.assigned_to, task.assigned_by, task.status.value,
                task.estimated_minutes, task.deadline, task.template_id,
                int(task.is_from_template), task.created_at, task.updated_at,
            ),
        )

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
        """Insert a new task in state ``assigned``."""
        now = _now()
        task = Task(
            id=_new_id(),
            title=title,
            description=description,
            household_id=household_id,
            assigned_to=assigned_to,
            assigned_by=assigned_by,
            estimated_minutes=estimated_minutes,
            deadline=deadline,
            created_at=now,
            updated_at=now,
        )
        with self._connect() as conn:
            self._insert_task(conn, task)
        logger.info("Task created: %s '%s' in household %s", task.id, title, household_id)
        return task

    def get_task(self, task_id: str) -> Task | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    def list_by_household(self, household_id: str) -> list[Task]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM tasks WHERE household_id = ? ORDER BY created_at DESC, rowid DESC",
                (household_id,),
            ).fetchall()
        return [self._row_to_task(r) for r in rows]

    def list_by_assignee(self, assignee_id: str) -> list[Task]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM tasks WHERE assigned_to = ? ORDER BY created_at DESC, rowid DESC",
                (assignee_id,),
            ).fetchall()
        return [self._row_to_task(r) for r in rows]

    def update_status(
        self,
        task_id: str,
        expected: TaskStatus,
        new_status: TaskStatus,
        reviewed_by: str | None = None,
    ) -> Task | None:
        """Move a task from ``expected`` to ``new_status``.

        Returns None if the task does not exist or is no longer in ``expected``.
        """
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE tasks
                SET status = ?, reviewed_by = COALESCE(?, reviewed_by), updated_at = ?
                WHERE id = ? AND status = ?
                """,
                (new_status.value, reviewed_by, _now(), task_id, expected.value),
            )
            if cursor.rowcount == 0:
                return None
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return self._row_to_task(row)

    def complete(self, task_id: str, actual_minutes: int) -> Task | None:
        """Mark an ``assigned`` task completed. None if it was not ``assigned``."""
        now = _now()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE tasks
                SET status = ?, actual_minutes = ?, completed_at = ?, updated_at = ?
                WHERE id = ? AND status = ?
                """,
                (
                    TaskStatus.COMPLETED.value, actual_minutes, now, now,
                    task_id, TaskStatus.ASSIGNED.value,
                ),
            )
            if cursor.rowcount == 0:
                return None
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return self._row_to_task(row)

    def create_template(
        self,
        title: str,
        household_id: str,
        created_by: str,
        estimated_minutes: int,
        recurrence: str = "weekly",
        description: str | None = None,
        priority: str = "medium",
    ) -> TaskTemplate:
        now = _now()
        template = TaskTemplate(
            id=_new_id(),
            title=title,
            description=description,
            estimated_minutes=estimated_minutes,
            priority=priority,
            recurrence=recurrence,
            household_id=household_id,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO task_templates
                    (id, title, description, estimated_minutes, priority, recurrence,
                     household_id, created_by, is_active, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, 1, ?, ?)
                """,
                (
                    template.id, title, description, estimated_minutes, priority,
                    recurrence, household_id, created_by, now, now,
                ),
            )
        logger.info("Template created: %s '%s'", template.id, title)
        return template

    def get_template(self, template_id: str) -> TaskTemplate | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM task_templates WHERE id = ?", (template_id,)
            ).fetchone()
        if row is None:
            return None
        return self._row_to_template(row)

    def deactivate_template(self, template_id: str) -> bool:
        """Soft-delete a template (is_active = 0)."""
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE task_templates SET is_active = 0, updated_at = ? "
                "WHERE id = ? AND is_active = 1",
                (_now(), template_id),
            )
        deactivated = cursor.rowcount > 0
        if deactivated:
            logger.info("Template %s deactivated", template_id)
        return deactivated

    def create_from_template(
        self, template_id: str, assigned_to: str | None = None,
    ) -> Task | None:
        """Copy an active template into a new task in one transaction.

        Returns None if the template is missing or inactive.
        """
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM task_templates WHERE id = ? AND is_active = 1",
                (template_id,),
            ).fetchone()
            if row is None:
                return None
            template = self._row_to_template(row)
            now = _now()
            task = Task(
                id=_new_id(),
                title=template.title,
                description=template.description,
                household_id=template.household_id,
                assigned_to=assigned_to,
                assigned_by=template.created_by,
                estimated_minutes=template.estimated_minutes,
                template_id=template.id,
                is_from_template=True,
                created_at=now,
                updated_at=now,
            )
            self._insert_task(conn, task)
        logger.info("Task %s created from template %s", task.id, template_id)
        return task


class TimeLogDB(_SQLiteTable):
    """Logged minutes. Reads of the admin queue join against ``users``."""

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS time_logs (
                    id           TEXT PRIMARY KEY,
                    user_id      TEXT    NOT NULL,
                    household_id TEXT    NOT NULL,
                    task_id      TEXT,
                    title        TEXT    NOT NULL,
                    description  TEXT,
                    minutes      INTEGER NOT NULL CHECK (minutes > 0),
                    status       TEXT    NOT NULL DEFAULT 'pending_approval',
                    log_date     TEXT    NOT NULL,
                    created_at   TEXT    NOT NULL,
                    reviewed_by  TEXT,
                    reviewed_at  TEXT
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_time_logs_user_date "
                "ON time_logs(user_id, log_date)"
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_time_logs_household "
                "ON time_logs(household_id)"
            )
        logger.debug("Time log table initialized at %s", self._db_path)

    @staticmethod
    def _row_to_time_log(row: sqlite3.Row) -> TimeLog:
        return TimeLog(
            id=row["id"],
            user_id=row["user_id"],
            household_id=row["household_id"],
            task_id=row["task_id"],
            title=row["title"],
            description=row["description"],
            minutes=row["minutes"],
            status=TimeLogStatus(row["status"]),
            log_date=row["log_date"],
            created_at=row["created_at"],
            reviewed_by=row["reviewed_by"],
            reviewed_at=row["reviewed_at"],
        )

    def add(
        self,
        user_id: str,
        household_id: str,
        title: str,
        minutes: int,
        log_date: str,
        status: TimeLogStatus = TimeLogStatus.PENDING_APPROVAL,
        description: str | None = None,
        task_id: str | None = None,
        reviewed_by: str | None = None,
        reviewed_at: str | None = None,
    ) -> TimeLog:
        time_log = TimeLog(
            id=_new_id(),
            user_id=user_id,
            household_id=household_id,
            task_id=task_id,
            title=title,
            description=description,
            minutes=minutes,
            status=status,
            log_date=log_date,
            created_at=_now(),
            reviewed_by=reviewed_by,
            reviewed_at=reviewed_at,
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO time_logs
                    (id, user_id, household_id, task_id, title, description, minutes,
                     status, log_date, created_at, reviewed_by, reviewed_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    time_log.id, user_id, household_id, task_id, title, description,
                    minutes, status.value, log_date, time_log.created_at,
                    reviewed_by, reviewed_at,
                ),
            )
        logger.info(
            "Time log added: %s user=%s %d min on %s (%s)",
            time_log.id, user_id, minutes, log_date, status.value,
        )
        return time_log

    def get(self, time_log_id: str) -> TimeLog | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM time_logs WHERE id = ?", (time_log_id,)
            ).fetchone()
        if row is None:
            return None
        return self._row_to_time_log(row)

    def list_by_user(
        self, user_id: str, start: str | None = None, end: str | None = None,
    ) -> list[TimeLog]:
        """Logs of one user, newest log_date first; bounds are inclusive."""
        query = "SELECT * FROM time_logs WHERE user_id = ?"
        params: list = [user_id]
        if start is not None:
            query += " AND log_date >= ?"
            params.append(start)
        if end is not None:
            query += " AND log_date <= ?"
            params.append(end)
        query += " ORDER BY log_date DESC, created_at DESC, rowid DESC"

        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_time_log(r) for r in rows]

    def list_by_household(self, household_id: str) -> list[TimeLogWithSubmitter]:
        """Household logs with submitter identity, newest submission first."""
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT t.*,
                       u.id           AS u_id,
                       u.display_name AS u_display_name,
                       u.first_name   AS u_first_name,
                       u.last_name    AS u_last_name,
                       u.is_guest     AS u_is_guest
                FROM time_logs t
                LEFT JOIN users u ON u.id = t.user_id
                WHERE t.household_id = ?
                ORDER BY t.created_at DESC, t.rowid DESC
                """,
                (household_id,),
            ).fetchall()

        result: list[TimeLogWithSubmitter] = []
        for row in rows:
            submitter = None
            if row["u_id"] is not None:
                submitter = SubmitterIdentity(
                    id=row["u_id"],
                    display_name=row["u_display_name"],
                    first_name=row["u_first_name"],
                    last_name=row["u_last_name"],
                    is_guest=bool(row["u_is_guest"]),
                )
            result.append(TimeLogWithSubmitter(self._row_to_time_log(row), submitter))
        return result

    def review(
        self, time_log_id: str, status: TimeLogStatus, reviewed_by: str,
    ) -> TimeLog | None:
        """Settle a pending log. Returns None unless it was still pending."""
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE time_logs
                SET status = ?, reviewed_by = ?, reviewed_at = ?
                WHERE id = ? AND status = ?
                """,
                (
                    status.value, reviewed_by, _now(), time_log_id,
                    TimeLogStatus.PENDING_APPROVAL.value,
                ),
            )
            if cursor.rowcount == 0:
                return None
            row = conn.execute(
                "SELECT * FROM time_logs WHERE id = ?", (time_log_id,)
            ).fetchone()
        logger.info("Time log %s reviewed: %s by %s", time_log_id, status.value, reviewed_by)
        return self._row_to_time_log(row)


class NotificationDB(_SQLiteTable):
    """In-app notification rows."""

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS notifications (
                    id           TEXT PRIMARY KEY,
                    title        TEXT    NOT NULL,
                    message      TEXT    NOT NULL,
                    type         TEXT    NOT NULL,
                    user_id      TEXT    NOT NULL,
                    household_id TEXT    NOT NULL,
                    related_id   TEXT,
                    is_read      INTEGER NOT NULL DEFAULT 0,
                    created_at   TEXT    NOT NULL
                )
            """)
        logger.debug("Notifications table initialized at %s", self._db_path)

    @staticmethod
    def _row_to_notification(row: sqlite3.Row) -> Notification:
        return Notification(
            id=row["id"],
            title=row["title"],
            message=row["message"],
            type=row["type"],
            user_id=row["user_id"],
            household_id=row["household_id"],
            related_id=row["related_id"],
            is_read=bool(row["is_read"]),
            created_at=row["created_at"],
        )

    def add(
        self,
        user_id: str,
        household_id: str,
        title: str,
        message: str,
        type: str,
        related_id: str | None = None,
    ) -> Notification:
        notification = Notification(
            id=_new_id(),
            title=title,
            message=message,
            type=type,
            user_id=user_id,
            household_id=household_id,
            related_id=related_id,
            created_at=_now(),
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO notifications
                    (id, title, message, type, user_id, household_id,
                     related_id, is_read, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?)
                """,
                (
                    notification.id, title, message, type, user_id, household_id,
                    related_id, notification.created_at,
                ),
            )
        logger.info("Notification %s stored for user %s (%s)", notification.id, user_id, type)
        return notification

    def list_for_user(self, user_id: str, unread_only: bool = False) -> list[Notification]:
        """Newest first, capped at 50."""
        query = "SELECT * FROM notifications WHERE user_id = ?"
        params: list = [user_id]
        if unread_only:
            query += " AND is_read = 0"
        query += " ORDER BY created_at DESC, rowid DESC LIMIT 50"
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_notification(r) for r in rows]
