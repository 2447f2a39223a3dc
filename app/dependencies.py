# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Everything is read from app.state, where create_app() put the store and
# the services built on it. There is no module-level store handle.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from core.services import AuthService, ContactService
from lib.document_store import DocumentStore


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore:
    """The document store handle owned by the running app."""
    return request.app.state.store


def get_auth_service(request: Request) -> AuthService:
    """Auth service bound to the app's store."""
    return request.app.state.auth_service


def get_contact_service(request: Request) -> ContactService:
    """Contact service bound to the app's store."""
    return request.app.state.contact_service


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
StoreDep = Annotated[DocumentStore, Depends(get_store)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ContactServiceDep = Annotated[ContactService, Depends(get_contact_service)]
