# =============================================================================
# tests/test_client.py - API Client and CLI Tests
# =============================================================================
# Drives ContactsAPIClient against the real app through FastAPI's
# TestClient (an httpx.Client), so requests never leave the process.
# =============================================================================

import argparse

import httpx
import pytest

from client.api import (
    APIConnectionError,
    APIError,
    ClientSession,
    ContactsAPIClient,
    SessionExpiredError,
)
from client.cli import build_parser, run


@pytest.fixture
def api(client):
    """API client sharing the test app's in-process transport."""
    return ContactsAPIClient(session=ClientSession(), http_client=client)


@pytest.fixture
def logged_in(api):
    api.register("alice", "secret123")
    return api


# =============================================================================
# Session
# =============================================================================

class TestClientSession:
    """Tests for the explicit session object."""

    def test_save_and_load(self, api, tmp_path):
        path = tmp_path / "session.json"
        api.session.path = path

        api.register("alice", "secret123")
        restored = ClientSession.load(path)

        assert restored.token == api.session.token
        assert restored.user.username == "alice"

    def test_load_missing_file(self, tmp_path):
        session = ClientSession.load(tmp_path / "nope.json")

        assert session.is_authenticated is False

    def test_load_corrupt_file(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")

        assert ClientSession.load(path).token is None

    @pytest.mark.parametrize("content", [
        "[]",
        '"token"',
        '{"token": "abc", "user": {"username": 42}}',
        '{"token": "abc", "user": "alice"}',
    ])
    def test_load_wrong_shape(self, tmp_path, content):
        path = tmp_path / "session.json"
        path.write_text(content, encoding="utf-8")

        session = ClientSession.load(path)

        assert session.is_authenticated is False
        assert session.user is None
        assert session.path == path

    def test_clear_removes_file(self, api, tmp_path):
        path = tmp_path / "session.json"
        api.session.path = path
        api.register("alice", "secret123")

        api.logout()

        assert not path.exists()
        assert api.session.is_authenticated is False


# =============================================================================
# Client
# =============================================================================

class TestContactsAPIClient:
    """Tests for the typed client methods."""

    def test_register_starts_session(self, api):
        user = api.register("alice", "secret123")

        assert api.session.is_authenticated
        assert api.session.user == user
        assert api.get_current_user().id == user.id

    def test_login(self, api):
        api.register("alice", "secret123")
        api.logout()

        user = api.login("alice", "secret123")

        assert user.username == "alice"
        assert api.session.is_authenticated

    def test_bad_login_raises_api_error(self, api):
        with pytest.raises(APIError) as exc_info:
            api.login("ghost", "secret123")

        assert exc_info.value.status_code == 401
        assert not isinstance(exc_info.value, SessionExpiredError)

    def test_contact_crud(self, logged_in):
        created = logged_in.create_contact("Bob", "bob@x.com", "555-0100")

        assert logged_in.get_contact(created.id) == created
        assert [c.id for c in logged_in.list_contacts()] == [created.id]

        updated = logged_in.update_contact(created.id, phone="555-0199", email=None)
        assert updated.phone == "555-0199"
        assert updated.email == "bob@x.com"

        removed = logged_in.delete_contact(created.id)
        assert removed.id == created.id
        assert logged_in.list_contacts() == []

    def test_field_errors(self, logged_in):
        with pytest.raises(APIError) as exc_info:
            logged_in.create_contact("Bob", "not-an-email", "555-0100")

        error = exc_info.value
        assert error.status_code == 400
        assert error.code == "VALIDATION_ERROR"
        assert error.field_errors == {"email": "Email address is not valid"}

    def test_not_found(self, logged_in):
        with pytest.raises(APIError) as exc_info:
            logged_in.get_contact("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Contact not found"

    def test_expired_session_is_cleared(self, logged_in):
        logged_in.session.token = "expired.or.forged"

        with pytest.raises(SessionExpiredError) as exc_info:
            logged_in.list_contacts()

        assert exc_info.value.message == "Session expired. Please login again."
        assert logged_in.session.token is None
        assert logged_in.session.user is None

    def test_health(self, api):
        assert api.health()["status"] == "healthy"

    def test_connection_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.Client(base_url="http://api.invalid", transport=httpx.MockTransport(refuse))
        api = ContactsAPIClient("http://api.invalid", http_client=http)

        with pytest.raises(APIConnectionError) as exc_info:
            api.health()

        assert exc_info.value.code == "CONNECTION_ERROR"


# =============================================================================
# CLI
# =============================================================================

class TestCLI:
    """Tests for the terminal client commands."""

    def parse(self, *argv):
        return build_parser().parse_args(list(argv))

    def test_register_and_whoami(self, api, capsys):
        assert run(self.parse("register", "alice", "--password", "secret123"), api) == 0
        assert run(self.parse("whoami"), api) == 0

        out = capsys.readouterr().out
        assert "Logged in as alice" in out
        assert out.strip().endswith("alice")

    def test_requires_login(self, api, capsys):
        assert run(self.parse("list"), api) == 1

        assert "Not logged in" in capsys.readouterr().err

    def test_add_list_and_search(self, logged_in, capsys):
        assert run(self.parse("add", "Bob", "bob@x.com", "555-0100"), logged_in) == 0
        assert run(self.parse("add", "Carol", "carol@y.org", "555-0111"), logged_in) == 0
        capsys.readouterr()

        run(self.parse("list", "--search", "CAROL"), logged_in)
        out = capsys.readouterr().out
        assert "Carol" in out and "Bob" not in out

        run(self.parse("list", "--search", "zzz"), logged_in)
        assert "No contacts found" in capsys.readouterr().out

    def test_add_with_blank_field(self, logged_in, capsys):
        assert run(self.parse("add", "Bob", "  ", "555-0100"), logged_in) == 1

        assert "Email is required" in capsys.readouterr().err
        assert logged_in.list_contacts() == []

    def test_edit_and_delete(self, logged_in, capsys):
        contact = logged_in.create_contact("Bob", "bob@x.com", "555-0100")

        assert run(self.parse("edit", contact.id, "--phone", "555-0199"), logged_in) == 0
        assert logged_in.get_contact(contact.id).phone == "555-0199"

        assert run(self.parse("delete", contact.id), logged_in) == 0
        assert "Contact deleted successfully" in capsys.readouterr().out
        assert logged_in.list_contacts() == []

    def test_dashboard(self, logged_in, capsys):
        logged_in.create_contact("Bob", "bob@x.com", "555-0100")

        assert run(self.parse("dashboard"), logged_in) == 0

        out = capsys.readouterr().out
        assert "Welcome back, alice!" in out
        assert "Total contacts: 1" in out

    def test_logout(self, logged_in):
        assert run(self.parse("logout"), logged_in) == 0

        assert logged_in.session.is_authenticated is False

    def test_parser_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_namespace_without_parser(self, logged_in, capsys):
        args = argparse.Namespace(command="list", search=None)

        assert run(args, logged_in) == 0
        assert "No contacts yet" in capsys.readouterr().out
