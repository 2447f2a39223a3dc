# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for MyContacts:
# - test_models.py: Pydantic model validation and wire aliases
# - test_validation.py: Contact field validation policies
# - test_document_store.py: In-memory and Supabase store backends
# - test_auth_service.py: Registration, login and tokens
# - test_contact_service.py: Owner-scoped contact CRUD
# - test_api.py: HTTP endpoints end to end
# - test_client.py: API client, session handling and CLI
# - test_views.py: Search, dashboard and rendering
#
# Run tests with: pytest
# =============================================================================
