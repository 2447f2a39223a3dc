# =============================================================================
# app/auth/routes.py - User/Auth Routes
# =============================================================================
# API endpoints for registration, login and the current user.
# Mounted under /api/users in main.py.
#
# Handlers are plain functions: bcrypt hashing is CPU-bound, so FastAPI
# runs them in its threadpool instead of on the event loop.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_user
from app.dependencies import AuthServiceDep
from core.models.user import AuthResponse, AuthUser, User, UserCredentials

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_user(
    credentials: UserCredentials,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    """
    Register a new user.

    Returns:
        AuthResponse: The new user's public fields and a session token

    Raises:
        400: Missing username/password or password too short
        409: Username already registered
    """
    return auth_service.register(credentials.username, credentials.password)


@router.post("/login", response_model=AuthResponse)
def login_user(
    credentials: UserCredentials,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    """
    Log in with username and password.

    Raises:
        400: Missing username/password
        401: Unknown username or wrong password
    """
    return auth_service.login(credentials.username, credentials.password)


@router.get("/current", response_model=User)
def current_user(
    auth_service: AuthServiceDep,
    user: AuthUser = Depends(get_current_user),
) -> User:
    """
    Get the current authenticated user's public fields.

    Raises:
        401: If not authenticated
    """
    return auth_service.get_user(user.id)
