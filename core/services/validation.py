# =============================================================================
# core/services/validation.py - Contact Field Validation
# =============================================================================
# Checks contact name/email/phone before anything is written.
#
# Two policies, selected with VALIDATION_POLICY:
# - lenient: shape checks only (something@domain.tld, digits and separators)
# - strict:  email-validator syntax rules (via pydantic EmailStr) and
#            E.164-style phone numbers
#
# Errors are collected per field and raised together as one
# ValidationFailedError so the client can show all of them at once.
# =============================================================================

import re
from typing import Any, Literal

from pydantic import EmailStr, TypeAdapter, ValidationError

from app.exceptions import ValidationFailedError

ValidationPolicy = Literal["lenient", "strict"]

CONTACT_FIELDS = ("name", "email", "phone")

NAME_MAX_LENGTH = 100

_LENIENT_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_LENIENT_PHONE = re.compile(r"^[0-9+\-().\s]{3,32}$")
_PHONE_SEPARATORS = re.compile(r"[\s\-.()]")
_STRICT_PHONE = re.compile(r"^\+?[0-9]{7,15}$")

_email_adapter = TypeAdapter(EmailStr)


class ContactValidator:
    """
    Validates and normalizes contact fields under a given policy.

    Example:
        validator = ContactValidator("strict")
        clean = validator.validate_new({"name": " Bob ", "email": "bob@x.com", "phone": "555-0100"})
        # {"name": "Bob", "email": "bob@x.com", "phone": "555-0100"}
    """

    def __init__(self, policy: ValidationPolicy = "lenient"):
        if policy not in ("lenient", "strict"):
            raise ValueError(f"Unknown validation policy: {policy}")
        self.policy = policy

    # -------------------------------------------------------------------------
    # Field checks
    # -------------------------------------------------------------------------

    def check_name(self, value: str) -> str | None:
        """Return an error message, or None if the name is acceptable."""
        if len(value) > NAME_MAX_LENGTH:
            return f"Name must be at most {NAME_MAX_LENGTH} characters"
        return None

    def check_email(self, value: str) -> str | None:
        if self.policy == "strict":
            try:
                _email_adapter.validate_python(value)
            except ValidationError:
                return "Email address is not valid"
            return None
        if not _LENIENT_EMAIL.match(value):
            return "Email address is not valid"
        return None

    def check_phone(self, value: str) -> str | None:
        if self.policy == "strict":
            if not _STRICT_PHONE.match(_PHONE_SEPARATORS.sub("", value)):
                return "Phone number must have 7-15 digits, optionally starting with +"
            return None
        if not _LENIENT_PHONE.match(value) or sum(ch.isdigit() for ch in value) < 3:
            return "Phone number is not valid"
        return None

    def _check(self, field: str, value: str) -> str | None:
        return getattr(self, f"check_{field}")(value)

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def validate_new(self, fields: dict[str, Any]) -> dict[str, str]:
        """
        Validate a full contact for creation.

        Args:
            fields: Raw name/email/phone values (missing ones may be None)

        Returns:
            Stripped values for all three fields

        Raises:
            ValidationFailedError: With one message per bad field
        """
        clean: dict[str, str] = {}
        errors: dict[str, str] = {}

        for field in CONTACT_FIELDS:
            value = fields.get(field)
            value = value.strip() if isinstance(value, str) else ""
            if not value:
                errors[field] = f"{field.capitalize()} is required"
                continue
            problem = self._check(field, value)
            if problem:
                errors[field] = problem
            else:
                clean[field] = value

        if errors:
            missing = any(message.endswith("is required") for message in errors.values())
            raise ValidationFailedError(
                message="All fields are mandatory!" if missing else "Contact fields are not valid",
                errors=errors,
            )
        return clean

    def validate_changes(self, fields: dict[str, Any]) -> dict[str, str]:
        """
        Validate a partial update.

        Unknown keys and None values are ignored; a present but blank
        value is an error.

        Returns:
            Stripped values for the fields that will change
        """
        clean: dict[str, str] = {}
        errors: dict[str, str] = {}

        for field in CONTACT_FIELDS:
            value = fields.get(field)
            if value is None:
                continue
            value = value.strip() if isinstance(value, str) else ""
            if not value:
                errors[field] = f"{field.capitalize()} cannot be empty"
                continue
            problem = self._check(field, value)
            if problem:
                errors[field] = problem
            else:
                clean[field] = value

        if errors:
            raise ValidationFailedError(message="Contact fields are not valid", errors=errors)
        return clean
