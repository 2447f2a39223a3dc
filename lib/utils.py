# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


# =============================================================================
# Identifier Utilities
# =============================================================================

def new_id() -> str:
    """Generate a new opaque document identifier."""
    return uuid4().hex


def normalize_id(value: str | UUID) -> str:
    """
    Normalize an identifier to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        contact_id = normalize_id(uuid_obj)  # "550e8400..."
        contact_id = normalize_id(" 550e8400... ")  # "550e8400..."
    """
    return value.hex if isinstance(value, UUID) else str(value).strip()


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """
    Parse a stored timestamp into an aware datetime.

    Stores hand back either datetime objects (in-memory) or ISO 8601
    strings (Supabase/PostgREST). Naive values are assumed to be UTC.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for library-level errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result
