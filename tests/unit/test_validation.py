"""
Unit tests for the field rule table.

Tests verify:
- Normalization (trim, email lowercase)
- Per-field rules and their messages
- Violations are collected across fields and within a field
- ensure_valid raises with the full violation list
"""

import time

import pytest

from src.domain.exceptions import UserValidationError
from src.domain.ports import FieldViolation
from src.domain.validation import FIELD_RULES, ensure_valid, validate_user


def fields_of(errors: list[FieldViolation]) -> list[str]:
    return [e.field for e in errors]


def messages_for(errors: list[FieldViolation], field: str) -> list[str]:
    return [e.message for e in errors if e.field == field]


class TestFieldRuleTable:
    """Tests for FIELD_RULES structure."""

    def test_table_covers_all_user_fields_in_order(self) -> None:
        """Table is keyed by the four payload fields."""
        assert list(FIELD_RULES) == ["name", "email", "contactNo", "address"]

    def test_every_field_has_at_least_one_rule(self) -> None:
        for name, spec in FIELD_RULES.items():
            assert spec.rules, f"{name} has no rules"


class TestNormalization:
    """Tests for value normalization."""

    def test_valid_payload_accepted(self, valid_payload: dict[str, str]) -> None:
        outcome = validate_user(valid_payload)
        assert outcome.is_valid
        assert outcome.errors == []

    def test_email_trimmed_and_lowercased(self, valid_payload: dict[str, str]) -> None:
        valid_payload["email"] = "  JO@Example.COM "
        values = ensure_valid(valid_payload)
        assert values["email"] == "jo@example.com"

    def test_other_fields_trimmed(self, valid_payload: dict[str, str]) -> None:
        valid_payload["name"] = "  Jo Ann  "
        valid_payload["contactNo"] = " 123-456-7890 "
        valid_payload["address"] = "\t1 Main Street, Springfield\n"
        values = ensure_valid(valid_payload)
        assert values["name"] == "Jo Ann"
        assert values["contactNo"] == "123-456-7890"
        assert values["address"] == "1 Main Street, Springfield"

    def test_unknown_keys_ignored(self, valid_payload: dict[str, str]) -> None:
        valid_payload["role"] = "admin"
        values = ensure_valid(valid_payload)
        assert "role" not in values

    def test_same_input_same_output(self, valid_payload: dict[str, str]) -> None:
        assert validate_user(valid_payload) == validate_user(valid_payload)


class TestRequiredFields:
    """Tests for missing, null and blank values."""

    def test_empty_payload_reports_every_field(self) -> None:
        outcome = validate_user({})
        assert fields_of(outcome.errors) == ["name", "email", "contactNo", "address"]
        assert [e.message for e in outcome.errors] == [
            "Name is required",
            "Email is required",
            "Contact number is required",
            "Address is required",
        ]

    @pytest.mark.parametrize("field", ["name", "email", "contactNo", "address"])
    def test_blank_value_is_required_error(
        self, valid_payload: dict[str, str], field: str
    ) -> None:
        valid_payload[field] = "   "
        outcome = validate_user(valid_payload)
        assert fields_of(outcome.errors) == [field]
        assert outcome.errors[0].message == FIELD_RULES[field].required_message

    @pytest.mark.parametrize("field", ["name", "email", "contactNo", "address"])
    def test_null_value_is_required_error(
        self, valid_payload: dict[str, object], field: str
    ) -> None:
        valid_payload[field] = None
        outcome = validate_user(valid_payload)
        assert fields_of(outcome.errors) == [field]

    @pytest.mark.parametrize("field", ["name", "email", "contactNo", "address"])
    def test_non_string_value_rejected(
        self, valid_payload: dict[str, object], field: str
    ) -> None:
        valid_payload[field] = 1234567890
        outcome = validate_user(valid_payload)
        assert fields_of(outcome.errors) == [field]
        assert outcome.errors[0].message == FIELD_RULES[field].type_message


class TestNameRules:
    """Tests for name rules."""

    @pytest.mark.parametrize("name", ["Jo", "Mary Jane Watson", "a" * 50])
    def test_valid_names(self, valid_payload: dict[str, str], name: str) -> None:
        valid_payload["name"] = name
        assert validate_user(valid_payload).is_valid

    def test_too_short(self, valid_payload: dict[str, str]) -> None:
        valid_payload["name"] = "J"
        errors = validate_user(valid_payload).errors
        assert messages_for(errors, "name") == ["Name must be between 2 and 50 characters"]

    def test_too_long(self, valid_payload: dict[str, str]) -> None:
        valid_payload["name"] = "a" * 51
        errors = validate_user(valid_payload).errors
        assert messages_for(errors, "name") == ["Name must be between 2 and 50 characters"]

    @pytest.mark.parametrize("name", ["Jo4nn", "O'Brien", "Anne-Marie", "José"])
    def test_letters_and_spaces_only(self, valid_payload: dict[str, str], name: str) -> None:
        valid_payload["name"] = name
        errors = validate_user(valid_payload).errors
        assert messages_for(errors, "name") == ["Name can only contain letters and spaces"]

    def test_multiple_violations_collected_for_one_field(
        self, valid_payload: dict[str, str]
    ) -> None:
        """A one-character digit breaks both name rules."""
        valid_payload["name"] = "7"
        errors = validate_user(valid_payload).errors
        assert messages_for(errors, "name") == [
            "Name must be between 2 and 50 characters",
            "Name can only contain letters and spaces",
        ]


class TestEmailRules:
    """Tests for email rules."""

    @pytest.mark.parametrize(
        "email",
        [
            "user@example.com",
            "first.last@example.co.uk",
            "user-name@sub.example.org",
            "u_1@example.io",
        ],
    )
    def test_valid_emails(self, valid_payload: dict[str, str], email: str) -> None:
        valid_payload["email"] = email
        assert validate_user(valid_payload).is_valid

    @pytest.mark.parametrize(
        "email",
        [
            "plainaddress",
            "@example.com",
            "user@",
            "user@example",
            "user@example.comm",
            "user..name@example.com",
            "user name@example.com",
            "user@exa mple.com",
        ],
    )
    def test_invalid_emails(self, valid_payload: dict[str, str], email: str) -> None:
        valid_payload["email"] = email
        errors = validate_user(valid_payload).errors
        assert errors == [FieldViolation("email", "Please enter a valid email")]

    def test_overlong_email_rejected(self, valid_payload: dict[str, str]) -> None:
        valid_payload["email"] = "a" * 250 + "@example.com"
        errors = validate_user(valid_payload).errors
        assert fields_of(errors) == ["email"]

    @pytest.mark.parametrize(
        "email",
        [
            "a" * 28 + "!",
            "a" * 240 + "!",
            "user@" + "a" * 240 + "!",
            "a-" * 100 + "@example.c",
        ],
    )
    def test_near_miss_rejected_in_linear_time(
        self, valid_payload: dict[str, str], email: str
    ) -> None:
        """Long word runs that almost match fail fast instead of backtracking."""
        valid_payload["email"] = email

        start = time.perf_counter()
        errors = validate_user(valid_payload).errors
        elapsed = time.perf_counter() - start

        assert errors == [FieldViolation("email", "Please enter a valid email")]
        assert elapsed < 0.5, f"email check took {elapsed:.2f}s"


class TestContactNoRules:
    """Tests for contactNo rules."""

    @pytest.mark.parametrize(
        "contact_no",
        ["1234567890", "(555) 123-4567", "+1 555 123 4567", "123456789012345"],
    )
    def test_valid_contact_numbers(self, valid_payload: dict[str, str], contact_no: str) -> None:
        valid_payload["contactNo"] = contact_no
        assert validate_user(valid_payload).is_valid

    @pytest.mark.parametrize(
        "contact_no",
        ["123456789", "1234567890123456", "555-CALL-NOW", "123.456.7890"],
    )
    def test_invalid_contact_numbers(
        self, valid_payload: dict[str, str], contact_no: str
    ) -> None:
        valid_payload["contactNo"] = contact_no
        errors = validate_user(valid_payload).errors
        assert errors == [
            FieldViolation("contactNo", "Please enter a valid contact number (10-15 digits)")
        ]

    def test_length_checked_after_trim(self, valid_payload: dict[str, str]) -> None:
        """Surrounding whitespace does not count toward the 15 character limit."""
        valid_payload["contactNo"] = "   123456789012345   "
        assert validate_user(valid_payload).is_valid


class TestAddressRules:
    """Tests for address rules."""

    def test_boundaries_accepted(self, valid_payload: dict[str, str]) -> None:
        valid_payload["address"] = "a" * 10
        assert validate_user(valid_payload).is_valid
        valid_payload["address"] = "a" * 200
        assert validate_user(valid_payload).is_valid

    @pytest.mark.parametrize("address", ["1 Main", "a" * 9, "a" * 201])
    def test_out_of_range_rejected(self, valid_payload: dict[str, str], address: str) -> None:
        valid_payload["address"] = address
        errors = validate_user(valid_payload).errors
        assert len(errors) == 1
        assert errors[0].field == "address"
        assert "between 10 and 200" in errors[0].message


class TestEnsureValid:
    """Tests for ensure_valid."""

    def test_raises_with_all_violations(self) -> None:
        payload = {"name": "J", "email": "bad", "contactNo": "12", "address": "short"}
        with pytest.raises(UserValidationError) as exc_info:
            ensure_valid(payload)
        assert fields_of(exc_info.value.errors) == ["name", "email", "contactNo", "address"]

    def test_returns_every_field(self, valid_payload: dict[str, str]) -> None:
        values = ensure_valid(valid_payload)
        assert set(values) == {"name", "email", "contactNo", "address"}
