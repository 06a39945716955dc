"""Errors raised by the lifecycle services.

The HTTP layer maps each class to a status code; storage errors are not
wrapped and surface as internal errors.
"""

from __future__ import annotations


class ChoreLogError(Exception):
    """Base class for every expected failure of a core operation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ChoreLogError):
    """Malformed input: non-positive minutes, empty title, no household."""


class AuthorizationError(ChoreLogError):
    """The caller's role or household does not allow the operation."""


class NotFoundError(ChoreLogError):
    """A referenced user, task, template or time log does not exist."""


class InvalidTransitionError(ChoreLogError):
    """The entity is not in a state the requested transition starts from."""
