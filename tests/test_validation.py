# =============================================================================
# tests/test_validation.py - Contact Validation Tests
# =============================================================================
# Tests for the lenient and strict validation policies:
# - Required fields and blank values
# - Email and phone format rules per policy
# - Field-level error reporting
# =============================================================================

import pytest

from app.exceptions import ValidationFailedError
from core.services.validation import ContactValidator


@pytest.fixture
def lenient():
    return ContactValidator("lenient")


@pytest.fixture
def strict():
    return ContactValidator("strict")


# =============================================================================
# Creation
# =============================================================================

class TestValidateNew:
    """Tests for full-contact validation."""

    def test_valid_contact_is_stripped(self, lenient):
        clean = lenient.validate_new({"name": "  Bob ", "email": " bob@x.com", "phone": "555-0100 "})

        assert clean == {"name": "Bob", "email": "bob@x.com", "phone": "555-0100"}

    def test_missing_fields_are_reported_together(self, lenient):
        with pytest.raises(ValidationFailedError) as exc_info:
            lenient.validate_new({"name": "Bob"})

        error = exc_info.value
        assert error.status_code == 400
        assert error.message == "All fields are mandatory!"
        assert set(error.errors) == {"email", "phone"}

    def test_blank_counts_as_missing(self, lenient):
        with pytest.raises(ValidationFailedError) as exc_info:
            lenient.validate_new({"name": "   ", "email": "bob@x.com", "phone": "555-0100"})

        assert exc_info.value.errors == {"name": "Name is required"}

    def test_non_string_counts_as_missing(self, lenient):
        with pytest.raises(ValidationFailedError) as exc_info:
            lenient.validate_new({"name": 42, "email": "bob@x.com", "phone": "555-0100"})

        assert "name" in exc_info.value.errors

    def test_invalid_email(self, lenient):
        with pytest.raises(ValidationFailedError) as exc_info:
            lenient.validate_new({"name": "Bob", "email": "not-an-email", "phone": "555-0100"})

        error = exc_info.value
        assert error.message == "Contact fields are not valid"
        assert error.errors == {"email": "Email address is not valid"}
        assert error.to_dict()["details"]["errors"] == {"email": "Email address is not valid"}

    def test_name_too_long(self, lenient):
        with pytest.raises(ValidationFailedError) as exc_info:
            lenient.validate_new({"name": "x" * 101, "email": "bob@x.com", "phone": "555-0100"})

        assert "name" in exc_info.value.errors


# =============================================================================
# Policies
# =============================================================================

class TestLenientPolicy:
    """Shape-only checks."""

    @pytest.mark.parametrize("email", ["bob@x.com", "first.last+tag@sub.example.org", "a@b.co"])
    def test_accepts_email(self, lenient, email):
        assert lenient.check_email(email) is None

    @pytest.mark.parametrize("email", ["not-an-email", "bob@x", "bob @x.com", "@x.com"])
    def test_rejects_email(self, lenient, email):
        assert lenient.check_email(email) is not None

    @pytest.mark.parametrize("phone", ["555-0100", "(555) 010-0100", "+44 20 7946 0958", "911"])
    def test_accepts_phone(self, lenient, phone):
        assert lenient.check_phone(phone) is None

    @pytest.mark.parametrize("phone", ["call me", "12", "555-CALL", "--"])
    def test_rejects_phone(self, lenient, phone):
        assert lenient.check_phone(phone) is not None


class TestStrictPolicy:
    """email-validator syntax and E.164-style phones."""

    def test_accepts_regular_email(self, strict):
        assert strict.check_email("bob@example.com") is None

    @pytest.mark.parametrize("email", ["not-an-email", "bob@@example.com", "bob@example..com"])
    def test_rejects_email(self, strict, email):
        assert strict.check_email(email) is not None

    @pytest.mark.parametrize("phone", ["+14155550100", "+44 20 7946 0958", "(415) 555-0100"])
    def test_accepts_phone(self, strict, phone):
        assert strict.check_phone(phone) is None

    @pytest.mark.parametrize("phone", ["555-01", "911", "+1234567890123456", "+1 415 CALL NOW"])
    def test_rejects_phone(self, strict, phone):
        assert strict.check_phone(phone) is not None

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValueError):
            ContactValidator("paranoid")


# =============================================================================
# Updates
# =============================================================================

class TestValidateChanges:
    """Tests for partial-update validation."""

    def test_none_means_unchanged(self, lenient):
        assert lenient.validate_changes({"name": None, "phone": " 555-0199 "}) == {"phone": "555-0199"}

    def test_empty_update_is_allowed(self, lenient):
        assert lenient.validate_changes({}) == {}

    def test_blank_value_is_an_error(self, lenient):
        with pytest.raises(ValidationFailedError) as exc_info:
            lenient.validate_changes({"email": ""})

        assert exc_info.value.errors == {"email": "Email cannot be empty"}

    def test_malformed_value_is_an_error(self, lenient):
        with pytest.raises(ValidationFailedError):
            lenient.validate_changes({"email": "nope"})

    def test_unknown_keys_ignored(self, lenient):
        assert lenient.validate_changes({"user_id": "someone", "name": "Rob"}) == {"name": "Rob"}
