# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the contact manager's rules:
# - models/: Pydantic schemas for users and contacts
# - services/: Auth, contact CRUD and field validation
#
# Services receive their store handle explicitly and raise app.exceptions
# errors; they never touch the request or response objects.
# =============================================================================
