"""Tests for src.core.authorization — the Actor capability."""

import pytest

from src.core.authorization import Actor
from src.core.errors import AuthorizationError, NotFoundError, ValidationError
from src.data.models import Role, User


def _actor(**kwargs):
    return Actor(User(id="u1", **kwargs))


class TestActor:
    def test_load_unknown_user(self, storage):
        with pytest.raises(NotFoundError):
            Actor.load(storage, "missing")

    def test_load_seeded(self, actors, home):
        assert actors["admin"].is_admin
        assert not actors["member"].is_admin
        assert not actors["guest"].is_admin
        assert actors["guest"].household_id == home.household.id

    def test_require_household(self):
        assert _actor(household_id="h1").require_household() == "h1"
        with pytest.raises(ValidationError, match="join a household"):
            _actor().require_household()

    def test_require_admin(self):
        assert _actor(household_id="h1", role=Role.ADMIN).require_admin("x") == "h1"
        with pytest.raises(AuthorizationError, match="Only admins can review"):
            _actor(household_id="h1").require_admin("review")

    def test_admin_role_without_household_is_not_admin(self):
        with pytest.raises(AuthorizationError):
            _actor(role=Role.ADMIN).require_admin("x")

    def test_require_member_of(self):
        actor = _actor(household_id="h1")
        actor.require_member_of("h1")
        with pytest.raises(AuthorizationError):
            actor.require_member_of("h2")

    def test_require_admin_of_other_household(self):
        with pytest.raises(AuthorizationError):
            _actor(household_id="h1", role=Role.ADMIN).require_admin_of("h2", "x")
