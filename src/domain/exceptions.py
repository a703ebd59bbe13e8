"""
Domain exceptions - Semantic error types for user registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from .ports import FieldViolation


class UserRegistryError(Exception):
    """Base class for user registry domain errors."""

    pass


class UserValidationError(UserRegistryError):
    """Payload failed one or more field rules."""

    def __init__(self, errors: list[FieldViolation]) -> None:
        super().__init__(f"{len(errors)} field rule violation(s)")
        self.errors = errors


class EmailAlreadyRegistered(UserRegistryError):
    """Email is already used by another user."""

    def __init__(self, email: str) -> None:
        super().__init__(email)
        self.email = email


class UserNotFound(UserRegistryError):
    """No user exists with the given id."""

    def __init__(self, user_id: str) -> None:
        super().__init__(user_id)
        self.user_id = user_id


class StoreUnavailable(UserRegistryError):
    """Record store could not be reached or failed unexpectedly."""

    pass
