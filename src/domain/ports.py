"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the User record and the interface (port) that the
domain requires from the record store. Adapters implement these protocols.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class StoreStatus(str, Enum):
    """Connection health of the record store, as reported by the health check."""

    CONNECTED = "Connected"
    DISCONNECTED = "Disconnected"


@dataclass(frozen=True)
class FieldViolation:
    """A single field-scoped validation failure."""

    field: str
    message: str


@dataclass(frozen=True)
class User:
    """
    Persisted user record.

    `id`, `created_at` and `updated_at` are assigned by the store on insert
    and never change afterwards.
    """

    id: str
    name: str
    email: str
    contact_no: str
    address: str
    created_at: datetime
    updated_at: datetime


class UserRepository(Protocol):
    """Port interface for user persistence."""

    def insert(self, fields: dict[str, str]) -> User:
        """
        Persist a new user.

        Args:
            fields: Mapping with name, email, contactNo and address

        Returns:
            The stored record with id and timestamps populated

        Raises:
            UserValidationError: If the fields break a field rule
            EmailAlreadyRegistered: If the email is already stored
        """
        ...

    def find_by_email(self, email: str) -> User | None:
        """Return the user with this normalized email, if any."""
        ...

    def list_all(self) -> list[User]:
        """Return every user, most recently created first."""
        ...

    def delete_by_id(self, user_id: str) -> bool:
        """
        Remove the user with this id.

        Returns:
            True if a record was removed, False otherwise
        """
        ...
