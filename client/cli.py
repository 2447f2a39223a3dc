# =============================================================================
# client/cli.py - Terminal Client for MyContacts
# =============================================================================
# Manage your contacts from the terminal against a running API.
#
# Usage:
#   mycontacts register alice
#   mycontacts login alice
#   mycontacts dashboard
#   mycontacts list --search bob
#   mycontacts add "Bob" bob@x.com 555-0100
#   mycontacts edit <id> --phone 555-0199
#   mycontacts show <id>
#   mycontacts delete <id>
#   mycontacts logout
#
# (or `python -m client.cli ...` from the project root)
#
# Environment:
#   MYCONTACTS_API_URL      API root (default http://localhost:10000)
#   MYCONTACTS_SESSION_FILE Where the token is kept (default ~/.mycontacts/session.json)
# =============================================================================

import argparse
import getpass
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from client.api import (
    DEFAULT_BASE_URL,
    APIError,
    ClientError,
    ClientSession,
    ContactsAPIClient,
    SessionExpiredError,
)
from client.views import (
    contact_form_payload,
    dashboard_summary,
    render_contact_detail,
    render_contact_table,
    render_dashboard,
    search_contacts,
)

DEFAULT_SESSION_FILE = Path.home() / ".mycontacts" / "session.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mycontacts", description="MyContacts terminal client")
    commands = parser.add_subparsers(dest="command", required=True)

    for name in ("register", "login"):
        sub = commands.add_parser(name, help=f"{name} and store the session token")
        sub.add_argument("username")
        sub.add_argument("--password", help="Prompted for if omitted")

    commands.add_parser("logout", help="Forget the stored session token")
    commands.add_parser("whoami", help="Show the logged-in user")
    commands.add_parser("dashboard", help="Contact totals and recent contacts")

    sub = commands.add_parser("list", help="List contacts")
    sub.add_argument("--search", help="Filter by name, email or phone")

    sub = commands.add_parser("show", help="Show one contact")
    sub.add_argument("contact_id")

    sub = commands.add_parser("add", help="Add a contact")
    sub.add_argument("name")
    sub.add_argument("email")
    sub.add_argument("phone")

    sub = commands.add_parser("edit", help="Edit a contact")
    sub.add_argument("contact_id")
    sub.add_argument("--name")
    sub.add_argument("--email")
    sub.add_argument("--phone")

    sub = commands.add_parser("delete", help="Delete a contact")
    sub.add_argument("contact_id")

    return parser


def _print_form_errors(errors: dict[str, str]) -> None:
    for field, message in errors.items():
        print(f"  {field}: {message}", file=sys.stderr)


def run(args: argparse.Namespace, api: ContactsAPIClient) -> int:
    """Execute one parsed command. Returns the process exit code."""
    if args.command in ("register", "login"):
        password = args.password or getpass.getpass("Password: ")
        action = api.register if args.command == "register" else api.login
        user = action(args.username, password)
        print(f"Logged in as {user.username}")
        return 0

    if args.command == "logout":
        api.logout()
        print("Logged out")
        return 0

    if not api.session.is_authenticated:
        print("Not logged in. Run: mycontacts login <username>", file=sys.stderr)
        return 1

    if args.command == "whoami":
        print(api.get_current_user().username)
    elif args.command == "dashboard":
        summary = dashboard_summary(api.list_contacts())
        print(render_dashboard(summary, api.session.user))
    elif args.command == "list":
        contacts = search_contacts(api.list_contacts(), args.search)
        print(render_contact_table(contacts, args.search))
    elif args.command == "show":
        print(render_contact_detail(api.get_contact(args.contact_id)))
    elif args.command == "add":
        form = contact_form_payload(args.name, args.email, args.phone)
        if not form.ok:
            _print_form_errors(form.errors)
            return 1
        contact = api.create_contact(**form.payload)
        print("Contact created successfully")
        print(render_contact_detail(contact))
    elif args.command == "edit":
        form = contact_form_payload(args.name, args.email, args.phone, partial=True)
        contact = api.update_contact(args.contact_id, **form.payload)
        print("Contact updated successfully")
        print(render_contact_detail(contact))
    elif args.command == "delete":
        api.delete_contact(args.contact_id)
        print("Contact deleted successfully")
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    base_url = os.getenv("MYCONTACTS_API_URL", DEFAULT_BASE_URL)
    session_file = Path(os.getenv("MYCONTACTS_SESSION_FILE", str(DEFAULT_SESSION_FILE)))
    session = ClientSession.load(session_file)

    with ContactsAPIClient(base_url, session) as api:
        try:
            return run(args, api)
        except SessionExpiredError as e:
            print(f"{e.message} Run: mycontacts login <username>", file=sys.stderr)
        except APIError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            _print_form_errors(e.field_errors)
        except ClientError as e:
            print(f"Error: {e.message}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
