"""Tests for src.core.time_log_service — the time log approval lifecycle."""

import pytest
from unittest.mock import MagicMock

from src.core.authorization import Actor
from src.core.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from src.core.time_log_service import TimeLogService
from src.data.models import Role, TimeLog, TimeLogStatus, User


# ---------------------------------------------------------------------------
# submit
# ---------------------------------------------------------------------------


class TestSubmit:
    @pytest.mark.asyncio
    async def test_member_log_starts_pending(self, time_log_service, actors):
        log = await time_log_service.submit(
            actors["member"], title="Dishes", minutes=30, log_date="2025-03-10",
        )
        assert log.status == TimeLogStatus.PENDING_APPROVAL
        assert log.reviewed_by is None
        assert log.reviewed_at is None
        assert log.log_date == "2025-03-10T00:00:00.000"

    @pytest.mark.asyncio
    async def test_guest_treated_as_member(self, time_log_service, actors):
        log = await time_log_service.submit(
            actors["guest"], title="Laundry", minutes=20, log_date="2025-03-10",
        )
        assert log.status == TimeLogStatus.PENDING_APPROVAL

    @pytest.mark.asyncio
    async def test_admin_log_is_self_approved(self, time_log_service, actors):
        admin = actors["admin"]
        log = await time_log_service.submit(
            admin, title="Groceries", minutes=45, log_date="2025-03-10",
        )
        assert log.status == TimeLogStatus.APPROVED
        assert log.reviewed_by == admin.id
        assert log.reviewed_at is not None

    @pytest.mark.asyncio
    async def test_title_is_stripped(self, time_log_service, actors, storage):
        log = await time_log_service.submit(
            actors["member"], title="  Dishes ", minutes=5, log_date="2025-03-10",
        )
        assert storage.get_time_log(log.id).title == "Dishes"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("minutes", [0, -5, True, 2.5, "30"])
    async def test_invalid_minutes(self, time_log_service, actors, storage, home, minutes):
        with pytest.raises(ValidationError):
            await time_log_service.submit(
                actors["member"], title="Dishes", minutes=minutes, log_date="2025-03-10",
            )
        assert storage.get_time_logs_by_user(home.member.id) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "   "])
    async def test_empty_title(self, time_log_service, actors, title):
        with pytest.raises(ValidationError):
            await time_log_service.submit(
                actors["member"], title=title, minutes=10, log_date="2025-03-10",
            )

    @pytest.mark.asyncio
    async def test_user_without_household(self, time_log_service, storage):
        loner = Actor.load(storage, storage.users.add_user(first_name="Lou").id)
        with pytest.raises(ValidationError):
            await time_log_service.submit(loner, title="X", minutes=10, log_date="2025-03-10")

    @pytest.mark.asyncio
    async def test_bad_log_date(self, time_log_service, actors):
        with pytest.raises(ValidationError):
            await time_log_service.submit(
                actors["member"], title="X", minutes=10, log_date="someday",
            )

    @pytest.mark.asyncio
    async def test_linked_task_must_belong_to_household(self, time_log_service, actors, storage, home):
        task = storage.create_task("Vacuum", home.household.id, assigned_by=home.admin.id)
        log = await time_log_service.submit(
            actors["member"], title="Vacuum", minutes=15,
            log_date="2025-03-10", task_id=task.id,
        )
        assert log.task_id == task.id

        with pytest.raises(NotFoundError):
            await time_log_service.submit(
                actors["member"], title="Vacuum", minutes=15,
                log_date="2025-03-10", task_id="missing",
            )


# ---------------------------------------------------------------------------
# review
# ---------------------------------------------------------------------------


class TestReview:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("outcome", ["approved", "rejected"])
    async def test_pending_to_terminal(self, time_log_service, actors, outcome):
        log = await time_log_service.submit(
            actors["member"], title="Dishes", minutes=30, log_date="2025-03-10",
        )
        reviewed = await time_log_service.review(actors["admin"], log.id, outcome)
        assert reviewed.status == TimeLogStatus(outcome)
        assert reviewed.reviewed_by == actors["admin"].id
        assert reviewed.reviewed_at is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["bogus", "pending_approval"])
    async def test_non_admin_denied_before_status_check(self, time_log_service, actors, status):
        log = await time_log_service.submit(
            actors["guest"], title="Dishes", minutes=30, log_date="2025-03-10",
        )
        with pytest.raises(AuthorizationError):
            await time_log_service.review(actors["member"], log.id, status)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("first,second", [
        ("approved", "rejected"),
        ("approved", "approved"),
        ("rejected", "approved"),
    ])
    async def test_terminal_state_cannot_be_reviewed_again(
        self, time_log_service, actors, storage, first, second,
    ):
        log = await time_log_service.submit(
            actors["member"], title="Dishes", minutes=30, log_date="2025-03-10",
        )
        await time_log_service.review(actors["admin"], log.id, first)
        before = storage.get_time_log(log.id)

        with pytest.raises(InvalidTransitionError):
            await time_log_service.review(actors["admin"], log.id, second)
        assert storage.get_time_log(log.id) == before

    @pytest.mark.asyncio
    async def test_admin_self_approved_log_is_terminal(self, time_log_service, actors):
        log = await time_log_service.submit(
            actors["admin"], title="Shopping", minutes=45, log_date="2025-03-10",
        )
        with pytest.raises(InvalidTransitionError):
            await time_log_service.review(actors["admin"], log.id, "rejected")

    @pytest.mark.asyncio
    async def test_missing_log(self, time_log_service, actors):
        with pytest.raises(NotFoundError):
            await time_log_service.review(actors["admin"], "missing", "approved")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["pending_approval", "done", ""])
    async def test_invalid_outcome(self, time_log_service, actors, status):
        log = await time_log_service.submit(
            actors["member"], title="Dishes", minutes=30, log_date="2025-03-10",
        )
        with pytest.raises(ValidationError):
            await time_log_service.review(actors["admin"], log.id, status)

    @pytest.mark.asyncio
    async def test_member_cannot_review(self, time_log_service, actors, storage):
        log = await time_log_service.submit(
            actors["guest"], title="Dishes", minutes=30, log_date="2025-03-10",
        )
        with pytest.raises(AuthorizationError):
            await time_log_service.review(actors["member"], log.id, "approved")
        assert storage.get_time_log(log.id).status == TimeLogStatus.PENDING_APPROVAL

    @pytest.mark.asyncio
    async def test_admin_of_other_household_cannot_review(self, time_log_service, actors, storage):
        log = await time_log_service.submit(
            actors["member"], title="Dishes", minutes=30, log_date="2025-03-10",
        )
        other = storage.users.add_user(first_name="Olga")
        storage.users.create_household("Elsewhere", created_by=other.id)
        with pytest.raises(AuthorizationError):
            await time_log_service.review(Actor.load(storage, other.id), log.id, "approved")

    @pytest.mark.asyncio
    async def test_lost_race_raises_invalid_transition(self):
        """The conditional update failing means another reviewer got there first."""
        pending = TimeLog(
            id="l1", user_id="m1", household_id="h1", title="Dishes",
            minutes=30, log_date="2025-03-10T00:00:00.000",
        )
        settled = TimeLog(
            id="l1", user_id="m1", household_id="h1", title="Dishes",
            minutes=30, log_date="2025-03-10T00:00:00.000",
            status=TimeLogStatus.REJECTED, reviewed_by="a2",
        )
        storage = MagicMock()
        storage.get_time_log.side_effect = [pending, settled]
        storage.review_time_log.return_value = None
        admin = Actor(User(id="a1", household_id="h1", role=Role.ADMIN))

        with pytest.raises(InvalidTransitionError, match="rejected"):
            await TimeLogService(storage).review(admin, "l1", "approved")
        storage.review_time_log.assert_called_once_with("l1", TimeLogStatus.APPROVED, "a1")


# ---------------------------------------------------------------------------
# listing
# ---------------------------------------------------------------------------


class TestListing:
    @pytest.mark.asyncio
    async def test_list_for_user_range_inclusive_and_sorted(self, time_log_service, actors, home):
        member = actors["member"]
        for day in ["2025-03-08", "2025-03-09", "2025-03-10T23:59:59", "2025-03-11"]:
            await time_log_service.submit(member, title="X", minutes=5, log_date=day)

        everything = await time_log_service.list_for_user(home.member.id)
        assert [l.log_date[:10] for l in everything] == [
            "2025-03-11", "2025-03-10", "2025-03-09", "2025-03-08",
        ]

        window = await time_log_service.list_for_user(
            home.member.id, start_date="2025-03-09", end_date="2025-03-10",
        )
        assert [l.log_date[:10] for l in window] == ["2025-03-10", "2025-03-09"]

    @pytest.mark.asyncio
    async def test_list_for_user_open_ended(self, time_log_service, actors, home):
        member = actors["member"]
        await time_log_service.submit(member, title="X", minutes=5, log_date="2025-03-08")
        await time_log_service.submit(member, title="X", minutes=5, log_date="2025-03-12")
        since = await time_log_service.list_for_user(home.member.id, start_date="2025-03-10")
        assert len(since) == 1

    @pytest.mark.asyncio
    async def test_list_for_user_reversed_range(self, time_log_service, home):
        with pytest.raises(ValidationError):
            await time_log_service.list_for_user(
                home.member.id, start_date="2025-03-11", end_date="2025-03-10",
            )

    @pytest.mark.asyncio
    async def test_household_queue_admin_only(self, time_log_service, actors):
        first = await time_log_service.submit(
            actors["member"], title="A", minutes=5, log_date="2025-03-10",
        )
        second = await time_log_service.submit(
            actors["guest"], title="B", minutes=5, log_date="2025-03-01",
        )
        rows = await time_log_service.list_for_household(actors["admin"])
        assert [r.time_log.id for r in rows] == [second.id, first.id]
        assert rows[0].user.display_name == "Cleo"
        assert rows[0].user.is_guest is True

        with pytest.raises(AuthorizationError):
            await time_log_service.list_for_household(actors["member"])
