# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .contact_service import ContactService
from .validation import ContactValidator

__all__ = [
    "AuthService",
    "ContactService",
    "ContactValidator",
]
