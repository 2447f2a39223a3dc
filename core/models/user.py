# =============================================================================
# core/models/user.py - User and Auth Schemas
# =============================================================================
# These models define the API contract for the users endpoints:
# - UserCredentials: Input for register/login
# - User: Public user fields (never includes the password hash)
# - AuthResponse: {user, token} returned by register/login
# - AuthUser: Identity resolved from a verified session token
#
# Wire field names (_id, createdAt) match what the web client reads.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCredentials(BaseModel):
    """
    Body of POST /api/users/register and /api/users/login.

    Fields are optional at the schema level so that missing values are
    reported by the auth service with field-level messages.

    Example:
        {"username": "alice", "password": "secret123"}
    """

    username: str | None = Field(
        default=None,
        description="Unique username",
        examples=["alice"],
    )

    password: str | None = Field(
        default=None,
        description="Plain-text password (hashed before storage)",
        examples=["secret123"],
    )


class User(BaseModel):
    """
    Public user fields.

    Example:
        {
            "_id": "6f1c0b9e2d8a4c1f9b3e7a5d4c2b1a09",
            "username": "alice",
            "createdAt": "2024-01-15T10:30:00Z"
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Unique user identifier")
    username: str = Field(..., description="Unique username")
    created_at: datetime = Field(..., alias="createdAt", description="When the user registered")


class AuthResponse(BaseModel):
    """Returned by register and login."""

    user: User
    token: str = Field(..., description="Bearer token for the Authorization header")


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a session token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    username: str | None = None
