# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The Bearer token is read from the Authorization header and verified by
# the app's AuthService. Failures raise UnauthorizedError, which the error
# boundary in main.py turns into a 401 envelope.
#
# Usage:
#   from app.auth import get_current_user
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.dependencies import AuthServiceDep
from app.exceptions import UnauthorizedError
from core.models.user import AuthUser

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. auto_error is off so a missing header goes
# through our own 401 envelope rather than FastAPI's 403.
security = HTTPBearer(auto_error=False)


async def get_current_user(
    auth_service: AuthServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Extract and validate the user from the session token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature and expiry
    3. Returns an AuthUser with the user's ID and username

    Raises:
        UnauthorizedError: 401 if the token is missing, invalid or expired
    """
    token = credentials.credentials if credentials else None
    user = auth_service.authenticate(token)
    logger.debug(f"Authenticated user: {user.id}")
    return user


async def get_current_user_optional(
    auth_service: AuthServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthUser]:
    """
    Optionally get the current user from the session token.

    Returns None instead of raising when there is no valid token. Used by
    the root endpoint to greet logged-in callers.
    """
    if credentials is None:
        return None

    try:
        return auth_service.authenticate(credentials.credentials)
    except UnauthorizedError:
        return None
