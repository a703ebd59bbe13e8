"""
Domain layer - Pure business logic with zero framework imports.

This package contains the field rules, the User record and the service
that orchestrates user registration. It defines its own port interfaces
for infrastructure abstraction, ensuring true hexagonal architecture
decoupling.
"""

from .exceptions import (
    EmailAlreadyRegistered,
    StoreUnavailable,
    UserNotFound,
    UserRegistryError,
    UserValidationError,
)
from .ports import FieldViolation, StoreStatus, User, UserRepository
from .registration import UserService
from .validation import FIELD_RULES, ensure_valid, validate_user

__all__ = [
    "FIELD_RULES",
    "EmailAlreadyRegistered",
    "FieldViolation",
    "StoreStatus",
    "StoreUnavailable",
    "User",
    "UserNotFound",
    "UserRegistryError",
    "UserRepository",
    "UserService",
    "UserValidationError",
    "ensure_valid",
    "validate_user",
]
