# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the MyContacts API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   mycontacts-api              (or: python -m app.main)
#   uvicorn app.main:app --reload --port 10000
#
# Tests build their own instance with create_app(settings, store).
# =============================================================================

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import AuthUser, get_current_user_optional
from app.auth import routes as auth_routes
from app.config import Settings, get_settings
from app.exceptions import (
    MyContactsException,
    StoreUnavailableError,
    mycontacts_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from app.routers import contacts, health
from core.services import AuthService, ContactService, ContactValidator
from lib.document_store import DocumentStore, DocumentStoreError, InMemoryDocumentStore

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def build_store(settings: Settings) -> DocumentStore:
    """
    Create the document store selected by STORE_BACKEND.

    The handle is created here, once, and passed down explicitly.
    """
    unique_fields = {settings.USERS_TABLE: ["username"]}
    if settings.STORE_BACKEND == "supabase":
        from lib.supabase_store import SupabaseDocumentStore

        return SupabaseDocumentStore(
            url=settings.SUPABASE_URL,
            key=settings.SUPABASE_SERVICE_KEY,
            probe_table=settings.USERS_TABLE,
            unique_fields=unique_fields,
        )
    return InMemoryDocumentStore(unique_fields=unique_fields)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Connect the document store. A failure is logged and the API
      keeps running in degraded mode; /health reports the database as
      disconnected.
    - Shutdown: Close the store
    """
    settings: Settings = app.state.settings
    store: DocumentStore = app.state.store

    logger.info(f"Starting MyContacts API in {settings.ENVIRONMENT} mode")
    logger.info(f"Store backend: {settings.STORE_BACKEND}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    try:
        store.connect()
        logger.info("Document store connected")
    except DocumentStoreError as e:
        logger.error(f"Database connection error: {e}")
        logger.warning("App will continue running without database connection")

    yield

    logger.info("Shutting down MyContacts API")
    store.close()


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
) -> FastAPI:
    """
    Build a configured FastAPI application.

    Args:
        settings: Explicit settings (defaults to get_settings())
        store: Explicit store handle (defaults to build_store(settings))

    Returns:
        FastAPI: The application, with store and services on app.state
    """
    settings = settings or get_settings()
    store = store if store is not None else build_store(settings)
    configure_logging(settings)

    app = FastAPI(
        title="MyContacts API",
        description="""
## Personal Contact Management API

Register, log in, and keep a private list of contacts.

### How It Works

1. **Register** - `POST /api/users/register` with a username and password
2. **Log in** - `POST /api/users/login` returns a bearer token
3. **Manage contacts** - `/api/contacts` CRUD with `Authorization: Bearer <token>`

Every contact belongs to the user whose token created it; other users
get 404 for it.
""",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Users",
                "description": "Registration, login and current user",
            },
            {
                "name": "Contacts",
                "description": "Create and manage your contacts",
            },
            {
                "name": "Health",
                "description": "API health and liveness checks",
            },
        ],
    )

    app.state.settings = settings
    app.state.store = store
    app.state.started_at = time.monotonic()
    app.state.auth_service = AuthService(store, settings)
    app.state.contact_service = ContactService(
        store,
        ContactValidator(settings.VALIDATION_POLICY),
        contacts_table=settings.CONTACTS_TABLE,
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log method and path of every request."""
        logger.info(f"Request Method: {request.method}, Request URL: {request.url.path}")
        return await call_next(request)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(MyContactsException, mycontacts_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.exception_handler(DocumentStoreError)
    async def handle_store_error(request: Request, exc: DocumentStoreError):
        """Report store failures as 503 without leaking query details."""
        logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
        error = StoreUnavailableError(exc.code)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    app.add_exception_handler(Exception, unexpected_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(
        auth_routes.router,
        prefix="/api/users",
        tags=["Users"]
    )

    app.include_router(
        contacts.router,
        prefix="/api/contacts",
        tags=["Contacts"]
    )

    app.include_router(
        health.router,
        tags=["Health"]
    )

    # =========================================================================
    # Root Endpoint
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root(user: AuthUser | None = Depends(get_current_user_optional)):
        """
        Root endpoint - returns API info.
        """
        info = {
            "message": "MyContacts Backend API",
            "version": API_VERSION,
            "status": "running",
            "endpoints": {
                "health": "/health",
                "ping": "/ping",
                "contacts": "/api/contacts",
                "users": "/api/users",
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if user is not None:
            info["user"] = user.username
        return info

    return app


app = create_app()


def run(settings: Settings | None = None) -> None:
    """Serve the API with uvicorn on API_HOST:API_PORT."""
    settings = settings or get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development and settings.DEBUG,
    )


if __name__ == "__main__":
    run()
