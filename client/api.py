# =============================================================================
# client/api.py - MyContacts API Client
# =============================================================================
# Typed wrapper around the REST API using httpx.
#
# The bearer token lives on an explicit ClientSession object that callers
# create and pass in; the client never looks it up from global state.
# When an authenticated call comes back 401, the session is cleared and
# SessionExpiredError is raised so the view layer can send the user back
# to the login prompt.
#
# Usage:
#   session = ClientSession()
#   api = ContactsAPIClient("http://localhost:10000", session)
#   api.login("alice", "secret123")
#   for contact in api.list_contacts():
#       print(contact.name)
# =============================================================================

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from core.models.contact import Contact
from core.models.user import AuthResponse, User
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:10000"


# =============================================================================
# Errors
# =============================================================================

class ClientError(ApplicationError):
    """Base class for API client errors."""


class APIConnectionError(ClientError):
    """Raised when the API can't be reached at all."""

    def __init__(self, url: str, error: str):
        super().__init__(
            message=f"Cannot reach MyContacts API at {url}: {error}",
            code="CONNECTION_ERROR",
            suggestion="Check that the server is running and MYCONTACTS_API_URL is correct",
            details={"url": url, "error": error},
        )


class APIError(ClientError):
    """
    Raised for any non-2xx response.

    Built from the server's error envelope, so `code` and `details`
    carry the server's values (e.g. VALIDATION_ERROR with field errors).
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: str = "API_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)
        self.status_code = status_code

    @property
    def field_errors(self) -> dict[str, str]:
        """Per-field validation messages, if the server sent any."""
        return self.details.get("errors", {}) if self.details else {}

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            status_code=response.status_code,
            message=body.get("message") or body.get("detail") or response.reason_phrase,
            code=body.get("code", "API_ERROR"),
            suggestion=body.get("suggestion"),
            details=body.get("details"),
        )


class SessionExpiredError(APIError):
    """Raised when the server rejects the session token."""


# =============================================================================
# Session
# =============================================================================

@dataclass
class ClientSession:
    """
    Explicit holder of the logged-in user's token.

    Can be saved to and loaded from a small JSON file so a CLI can stay
    logged in between invocations.
    """

    token: str | None = None
    user: User | None = None
    path: Path | None = field(default=None, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def start(self, auth: AuthResponse) -> None:
        """Remember the token and user from a register/login response."""
        self.token = auth.token
        self.user = auth.user
        self.save()

    def clear(self) -> None:
        """Forget the token and user."""
        self.token = None
        self.user = None
        if self.path is not None and self.path.exists():
            self.path.unlink()

    def save(self) -> None:
        if self.path is None or not self.token:
            return
        data = {
            "token": self.token,
            "user": self.user.model_dump(mode="json", by_alias=True) if self.user else None,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "ClientSession":
        """Load a saved session, or return an empty one bound to `path`."""
        if not path.exists():
            return cls(path=path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {path}: {e}")
            return cls(path=path)
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed session file {path}")
            return cls(path=path)
        try:
            user = User.model_validate(data["user"]) if data.get("user") else None
        except ValidationError as e:
            logger.warning(f"Ignoring session file {path} with invalid user: {e}")
            return cls(path=path)
        token = data.get("token")
        return cls(token=token if isinstance(token, str) else None, user=user, path=path)


# =============================================================================
# Client
# =============================================================================

class ContactsAPIClient:
    """
    Client for the MyContacts REST API.

    Args:
        base_url: API root (without the /api suffix)
        session: Session holding the bearer token; a fresh one if omitted
        http_client: Preconfigured httpx.Client (e.g. a FastAPI TestClient)
        timeout: Request timeout in seconds when creating our own client
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: ClientSession | None = None,
        http_client: httpx.Client | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else ClientSession()
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ContactsAPIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        headers = {"Content-Type": "application/json"}
        authenticated = self.session.is_authenticated
        if authenticated:
            headers["Authorization"] = f"Bearer {self.session.token}"

        try:
            response = self._http.request(method, path, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise APIConnectionError(self.base_url, str(e))

        if response.status_code == 401 and authenticated:
            logger.info("Session expired, clearing stored token")
            self.session.clear()
            error = APIError.from_response(response)
            raise SessionExpiredError(
                status_code=401,
                message="Session expired. Please login again.",
                code=error.code,
                details=error.details,
            )
        if response.is_error:
            raise APIError.from_response(response)

        if "application/json" in response.headers.get("content-type", ""):
            return response.json()
        return response.text

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    def register(self, username: str, password: str) -> User:
        data = self._request("POST", "/api/users/register", {"username": username, "password": password})
        auth = AuthResponse.model_validate(data)
        self.session.start(auth)
        return auth.user

    def login(self, username: str, password: str) -> User:
        data = self._request("POST", "/api/users/login", {"username": username, "password": password})
        auth = AuthResponse.model_validate(data)
        self.session.start(auth)
        return auth.user

    def logout(self) -> None:
        """Forget the token locally. Tokens are stateless; there is no server call."""
        self.session.clear()

    def get_current_user(self) -> User:
        return User.model_validate(self._request("GET", "/api/users/current"))

    # -------------------------------------------------------------------------
    # Contacts
    # -------------------------------------------------------------------------

    def list_contacts(self) -> list[Contact]:
        return [Contact.model_validate(item) for item in self._request("GET", "/api/contacts")]

    def create_contact(self, name: str, email: str, phone: str) -> Contact:
        data = self._request("POST", "/api/contacts", {"name": name, "email": email, "phone": phone})
        return Contact.model_validate(data)

    def get_contact(self, contact_id: str) -> Contact:
        return Contact.model_validate(self._request("GET", f"/api/contacts/{contact_id}"))

    def update_contact(self, contact_id: str, **fields: str | None) -> Contact:
        payload = {key: value for key, value in fields.items() if value is not None}
        data = self._request("PUT", f"/api/contacts/{contact_id}", payload)
        return Contact.model_validate(data)

    def delete_contact(self, contact_id: str) -> Contact:
        return Contact.model_validate(self._request("DELETE", f"/api/contacts/{contact_id}"))

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health")
