"""
Field rules - Canonical validation table for user payloads.

One table, keyed by field name, is the single source of truth for what a
valid user looks like. The service checks incoming payloads against it and
the repository checks again before writing, so both layers always agree.

Each field is validated independently:
- missing, null or blank values report the field's "required" message
- non-string values report the field's "must be a string" message
- otherwise the value is normalized and every rule is evaluated, so a
  single field can contribute more than one violation
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .exceptions import UserValidationError
from .ports import FieldViolation

NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$", re.ASCII)
# Separators are mandatory between word runs, so a failed match never backtracks
# through alternative splits of the same run.
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$", re.ASCII)
CONTACT_NO_PATTERN = re.compile(r"^[0-9+\-\s()]{10,15}$", re.ASCII)

# RFC 5321 path limit
MAX_EMAIL_LENGTH = 254


@dataclass(frozen=True)
class FieldRule:
    """Predicate over a normalized value plus the message reported when it fails."""

    predicate: Callable[[str], bool]
    message: str


@dataclass(frozen=True)
class FieldSpec:
    required_message: str
    type_message: str
    normalize: Callable[[str], str] = str.strip
    rules: tuple[FieldRule, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ValidationOutcome:
    """Normalized values for the fields that passed, and every violation found."""

    values: dict[str, str]
    errors: list[FieldViolation]

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _length_between(low: int, high: int) -> Callable[[str], bool]:
    return lambda value: low <= len(value) <= high


def _is_email(value: str) -> bool:
    return len(value) <= MAX_EMAIL_LENGTH and EMAIL_PATTERN.match(value) is not None


def _normalize_email(value: str) -> str:
    return value.strip().lower()


FIELD_RULES: dict[str, FieldSpec] = {
    "name": FieldSpec(
        required_message="Name is required",
        type_message="Name must be a string",
        rules=(
            FieldRule(_length_between(2, 50), "Name must be between 2 and 50 characters"),
            FieldRule(
                lambda value: NAME_PATTERN.match(value) is not None,
                "Name can only contain letters and spaces",
            ),
        ),
    ),
    "email": FieldSpec(
        required_message="Email is required",
        type_message="Email must be a string",
        normalize=_normalize_email,
        rules=(FieldRule(_is_email, "Please enter a valid email"),),
    ),
    "contactNo": FieldSpec(
        required_message="Contact number is required",
        type_message="Contact number must be a string",
        rules=(
            FieldRule(
                lambda value: CONTACT_NO_PATTERN.match(value) is not None,
                "Please enter a valid contact number (10-15 digits)",
            ),
        ),
    ),
    "address": FieldSpec(
        required_message="Address is required",
        type_message="Address must be a string",
        rules=(
            FieldRule(
                _length_between(10, 200), "Address must be between 10 and 200 characters"
            ),
        ),
    ),
}


def validate_user(payload: Mapping[str, Any]) -> ValidationOutcome:
    """
    Check a raw payload against FIELD_RULES.

    Unknown keys are ignored. Violations are ordered by field (table order)
    and then by rule order within the field.
    """
    values: dict[str, str] = {}
    errors: list[FieldViolation] = []

    for name, spec in FIELD_RULES.items():
        raw = payload.get(name)

        if raw is None or (isinstance(raw, str) and not raw.strip()):
            errors.append(FieldViolation(name, spec.required_message))
            continue
        if not isinstance(raw, str):
            errors.append(FieldViolation(name, spec.type_message))
            continue

        value = spec.normalize(raw)
        failed = [rule.message for rule in spec.rules if not rule.predicate(value)]
        if failed:
            errors.extend(FieldViolation(name, message) for message in failed)
        else:
            values[name] = value

    return ValidationOutcome(values=values, errors=errors)


def ensure_valid(payload: Mapping[str, Any]) -> dict[str, str]:
    """
    Validate and normalize a payload.

    Returns:
        Normalized values for every field in FIELD_RULES

    Raises:
        UserValidationError: If any field rule is violated
    """
    outcome = validate_user(payload)
    if not outcome.is_valid:
        raise UserValidationError(outcome.errors)
    return outcome.values
