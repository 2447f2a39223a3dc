# =============================================================================
# core/services/auth_service.py - Registration, Login and Token Logic
# =============================================================================
# Handles the session/auth gate:
# - register: create a user with a bcrypt password hash
# - login: check credentials and issue a session token
# - authenticate: verify a session token and resolve the user identity
#
# Tokens are stateless HS256 JWTs (python-jose). Nothing about a session is
# stored server-side; validity is signature + "exp" claim only.
# =============================================================================

import logging
from datetime import timedelta
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from app.config import Settings
from app.exceptions import (
    InvalidCredentialsError,
    UnauthorizedError,
    UsernameTakenError,
    ValidationFailedError,
)
from core.models.user import AuthResponse, AuthUser, User
from lib.document_store import DocumentStore, DuplicateDocumentError
from lib.utils import new_id, utc_now

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50


class AuthService:
    """
    Service for user registration, login and token verification.

    Constructed with an explicit store handle and settings, so tests can
    run it against an in-memory store.

    Example:
        auth = AuthService(store, settings)
        result = auth.register("alice", "secret123")
        identity = auth.authenticate(result.token)
    """

    def __init__(self, store: DocumentStore, settings: Settings):
        self.store = store
        self.settings = settings
        self.users_table = settings.USERS_TABLE
        self._pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )

    # -------------------------------------------------------------------------
    # Passwords
    # -------------------------------------------------------------------------

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        return self._pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a stored hash."""
        try:
            return self._pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            # Stored value is not a recognizable hash
            logger.warning("Stored password hash could not be parsed")
            return False

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def create_token(self, user: User, expires_delta: timedelta | None = None) -> str:
        """
        Create a signed session token for a user.

        Args:
            user: The user the token identifies
            expires_delta: Optional custom lifetime (defaults to settings)

        Returns:
            str: The encoded JWT
        """
        issued_at = utc_now()
        lifetime = expires_delta or timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        claims = {
            "sub": user.id,
            "username": user.username,
            "iat": issued_at,
            "exp": issued_at + lifetime,
        }
        return jwt.encode(claims, self.settings.SECRET_KEY, algorithm=self.settings.JWT_ALGORITHM)

    def authenticate(self, token: str | None) -> AuthUser:
        """
        Verify a session token and return the identity it carries.

        Raises:
            UnauthorizedError: If the token is missing, malformed, expired,
                signed with another key, or has no subject
        """
        if not token:
            raise UnauthorizedError("Not authorized, token is missing")

        try:
            payload = jwt.decode(
                token,
                self.settings.SECRET_KEY,
                algorithms=[self.settings.JWT_ALGORITHM],
            )
        except ExpiredSignatureError:
            logger.warning("Session token has expired")
            raise UnauthorizedError("Token has expired")
        except JWTError as e:
            logger.warning(f"Session token validation failed: {e}")
            raise UnauthorizedError("Invalid token")

        user_id = payload.get("sub")
        if not user_id or not isinstance(user_id, str):
            logger.warning("Session token missing 'sub' claim")
            raise UnauthorizedError("Invalid token: missing user ID")

        return AuthUser(id=user_id, username=payload.get("username"))

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def _validate_credentials(
        self,
        username: Any,
        password: Any,
        check_policy: bool,
    ) -> tuple[str, str]:
        username = username.strip() if isinstance(username, str) else ""
        password = password if isinstance(password, str) else ""

        errors: dict[str, str] = {}
        if not username:
            errors["username"] = "Username is required"
        elif check_policy and not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            errors["username"] = (
                f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
            )
        if not password:
            errors["password"] = "Password is required"
        elif check_policy and len(password) < self.settings.PASSWORD_MIN_LENGTH:
            errors["password"] = (
                f"Password must be at least {self.settings.PASSWORD_MIN_LENGTH} characters"
            )

        if errors:
            missing = any(message.endswith("is required") for message in errors.values())
            raise ValidationFailedError(
                message="All fields are mandatory!" if missing else "Credentials are not valid",
                errors=errors,
            )
        return username, password

    def register(self, username: Any, password: Any) -> AuthResponse:
        """
        Create a new user and log them in.

        Returns:
            AuthResponse with the public user fields and a fresh token

        Raises:
            ValidationFailedError: Missing/blank fields or too-short password
            UsernameTakenError: Username already exists
        """
        username, password = self._validate_credentials(username, password, check_policy=True)

        if self.store.find_one(self.users_table, {"username": username}):
            logger.info(f"Registration rejected, username taken: {username}")
            raise UsernameTakenError(username)

        document = {
            "id": new_id(),
            "username": username,
            "password": self.hash_password(password),
            "created_at": utc_now(),
        }
        try:
            stored = self.store.insert(self.users_table, document)
        except DuplicateDocumentError:
            # Lost a race with a concurrent registration
            raise UsernameTakenError(username)

        user = User(**stored)
        logger.info(f"Registered user: {user.id}")
        return AuthResponse(user=user, token=self.create_token(user))

    def login(self, username: Any, password: Any) -> AuthResponse:
        """
        Check credentials and issue a token.

        Raises:
            ValidationFailedError: Missing fields
            InvalidCredentialsError: Unknown username or wrong password
        """
        username, password = self._validate_credentials(username, password, check_policy=False)

        document = self.store.find_one(self.users_table, {"username": username})
        if document is None or not self.verify_password(password, document.get("password", "")):
            logger.warning(f"Failed login for username: {username}")
            raise InvalidCredentialsError()

        user = User(**document)
        logger.info(f"User logged in: {user.id}")
        return AuthResponse(user=user, token=self.create_token(user))

    def get_user(self, user_id: str) -> User:
        """
        Load the public fields of an authenticated user.

        Raises:
            UnauthorizedError: If the token's user no longer exists
        """
        document = self.store.find_one(self.users_table, {"id": user_id})
        if document is None:
            logger.warning(f"Token refers to unknown user: {user_id}")
            raise UnauthorizedError("User no longer exists")
        return User(**document)
