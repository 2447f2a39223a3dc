# =============================================================================
# client/views.py - View Layer
# =============================================================================
# Presentation logic for the contacts client:
# - search_contacts: client-side substring search over the full list
# - dashboard_summary: totals and the newest contacts
# - contact_form_payload: client-side checks before submitting a form
# - render_*: plain-text rendering for the terminal
#
# Functions here take data in and return data or text out; they never
# talk to the API themselves.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from core.models.contact import Contact
from core.models.user import User
from lib.utils import utc_now

RECENT_DAYS = 7
LATEST_COUNT = 5


# =============================================================================
# Search
# =============================================================================

def search_contacts(contacts: list[Contact], term: str | None) -> list[Contact]:
    """
    Filter contacts by a search term.

    Name and email match case-insensitively; phone matches the raw
    substring. An empty term returns everything.
    """
    if not term:
        return list(contacts)
    needle = term.lower()
    return [
        contact for contact in contacts
        if needle in contact.name.lower()
        or needle in contact.email.lower()
        or term in contact.phone
    ]


# =============================================================================
# Dashboard
# =============================================================================

@dataclass
class DashboardSummary:
    """Numbers and list shown on the dashboard."""
    total: int
    recent: int
    latest: list[Contact] = field(default_factory=list)


def dashboard_summary(contacts: list[Contact], now: datetime | None = None) -> DashboardSummary:
    """
    Summarize a contact list.

    Args:
        contacts: Contacts as returned by the API
        now: Reference time (defaults to the current UTC time)

    Returns:
        DashboardSummary with the total, how many were added in the last
        seven days, and the first five contacts as listed
    """
    now = now or utc_now()
    week_ago = now - timedelta(days=RECENT_DAYS)
    recent = sum(1 for contact in contacts if contact.created_at >= week_ago)
    return DashboardSummary(
        total=len(contacts),
        recent=recent,
        latest=list(contacts[:LATEST_COUNT]),
    )


# =============================================================================
# Forms
# =============================================================================

@dataclass
class FormResult:
    """Outcome of client-side form checks."""
    payload: dict[str, str]
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def contact_form_payload(
    name: str | None,
    email: str | None,
    phone: str | None,
    partial: bool = False,
) -> FormResult:
    """
    Prepare a contact form submission.

    Strips every value. For a new contact all fields must be filled in;
    for an edit (`partial=True`) empty fields are simply left out.
    Format checks are left to the server, which applies its configured
    validation policy.
    """
    payload: dict[str, str] = {}
    errors: dict[str, str] = {}
    for key, value in (("name", name), ("email", email), ("phone", phone)):
        value = (value or "").strip()
        if value:
            payload[key] = value
        elif not partial:
            errors[key] = f"{key.capitalize()} is required"
    return FormResult(payload=payload, errors=errors)


# =============================================================================
# Rendering
# =============================================================================

def _format_date(value: datetime) -> str:
    return value.strftime("%B %d, %Y")


def render_contact_table(contacts: list[Contact], term: str | None = None) -> str:
    """Render contacts as a fixed-width table, or an empty-state message."""
    if not contacts:
        if term:
            return "No contacts found. Try adjusting your search terms."
        return "No contacts yet. Add your first contact to get started."

    rows = [("ID", "NAME", "EMAIL", "PHONE")]
    rows += [(c.id, c.name, c.email, c.phone) for c in contacts]
    widths = [max(len(row[i]) for row in rows) for i in range(4)]
    lines = ["  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip() for row in rows]
    lines.insert(1, "  ".join("-" * width for width in widths))
    return "\n".join(lines)


def render_contact_detail(contact: Contact) -> str:
    """Render a single contact."""
    return "\n".join([
        contact.name,
        f"  Email:      {contact.email}",
        f"  Phone:      {contact.phone}",
        f"  Date Added: {_format_date(contact.created_at)}",
        f"  Updated:    {_format_date(contact.updated_at)}",
        f"  ID:         {contact.id}",
    ])


def render_dashboard(summary: DashboardSummary, user: User | None = None) -> str:
    """Render the dashboard summary."""
    greeting = f"Welcome back, {user.username}!" if user else "Welcome back!"
    lines = [
        greeting,
        f"Total contacts: {summary.total}",
        f"Added this week: {summary.recent}",
        "",
        "Recent contacts:",
    ]
    if summary.latest:
        lines += [f"  {c.name} <{c.email}> {c.phone}" for c in summary.latest]
    else:
        lines.append("  (none yet)")
    return "\n".join(lines)
