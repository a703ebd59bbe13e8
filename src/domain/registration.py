"""
User registration domain service.

Each operation is a single pass: validate, then attempt at most one store
mutation. A failed validation never reaches the store.

Create flow
===========

    received -> validated -> advisory email lookup -> insert -> responded

The email lookup only gives a friendlier early answer. Two concurrent
requests for the same email can both pass it; the store's uniqueness
constraint then lets exactly one insert through and the other surfaces as
EmailAlreadyRegistered, the same error the lookup would have raised.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import EmailAlreadyRegistered, UserNotFound
from .ports import User, UserRepository
from .validation import ensure_valid

logger = logging.getLogger(__name__)


@dataclass
class UserService:
    """
    Domain service for user registration.

    Orchestrates validation and persistence for the create, list and
    delete operations.
    """

    repository: UserRepository

    def register(self, payload: Mapping[str, Any]) -> User:
        """
        Register a new user.

        Args:
            payload: Raw field map (name, email, contactNo, address)

        Returns:
            The stored user

        Raises:
            UserValidationError: If the payload breaks any field rule
            EmailAlreadyRegistered: If the email is already registered
        """
        fields = ensure_valid(payload)

        if self.repository.find_by_email(fields["email"]) is not None:
            logger.info("Rejected registration for existing email %s", fields["email"])
            raise EmailAlreadyRegistered(fields["email"])

        user = self.repository.insert(fields)
        logger.info("Registered user %s", user.id)
        return user

    def list_users(self) -> list[User]:
        """Return all users, newest first."""
        return self.repository.list_all()

    def delete_user(self, user_id: str) -> None:
        """
        Delete a user by id.

        Raises:
            UserNotFound: If no user has this id
        """
        if not self.repository.delete_by_id(user_id):
            raise UserNotFound(user_id)
        logger.info("Deleted user %s", user_id)
