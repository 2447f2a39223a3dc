# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the MyContacts web API:
# - main.py: App factory, middleware, error handlers, lifespan
# - config.py: Settings loaded from the environment / .env
# - exceptions.py: Error hierarchy and the JSON error envelope
# - dependencies.py: Request-scoped access to the store and services
# - auth/: Bearer-token dependency and /api/users routes
# - routers/: Contacts and health endpoints
#
# The app layer only handles HTTP; rules live in core/services.
# =============================================================================
