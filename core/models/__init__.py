# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Credentials, public user fields, token identity
# - contact.py: Contact CRUD schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .contact import Contact, ContactCreate, ContactUpdate
from .user import AuthResponse, AuthUser, User, UserCredentials

__all__ = [
    # Contacts
    "Contact",
    "ContactCreate",
    "ContactUpdate",
    # Users
    "AuthResponse",
    "AuthUser",
    "User",
    "UserCredentials",
]
