# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health, liveness and ping endpoints
# - contacts.py: Contact CRUD endpoints
#
# User/auth routes live in app/auth/routes.py.
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import contacts
from . import health

__all__ = [
    "contacts",
    "health",
]
