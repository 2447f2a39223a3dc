# =============================================================================
# client/ - MyContacts Client
# =============================================================================
# This package contains the client side of the application:
# - api.py: httpx-based API client with an explicit ClientSession
# - views.py: search, dashboard summary, form checks and text rendering
# - cli.py: argparse terminal interface wiring both together
# =============================================================================

from client.api import (
    APIConnectionError,
    APIError,
    ClientError,
    ClientSession,
    ContactsAPIClient,
    SessionExpiredError,
)
from client.views import (
    DashboardSummary,
    FormResult,
    contact_form_payload,
    dashboard_summary,
    render_contact_detail,
    render_contact_table,
    render_dashboard,
    search_contacts,
)

__all__ = [
    # API
    "APIConnectionError",
    "APIError",
    "ClientError",
    "ClientSession",
    "ContactsAPIClient",
    "SessionExpiredError",
    # Views
    "DashboardSummary",
    "FormResult",
    "contact_form_payload",
    "dashboard_summary",
    "render_contact_detail",
    "render_contact_table",
    "render_dashboard",
    "search_contacts",
]
