"""Credentials identity provider.

Checks an email/password pair against the users table and opens a session.
Sign-in failures are raised as AuthError subclasses tagged with their kind;
infrastructure failures (database, Valkey) propagate untouched.
"""

import logging

from pydantic import ValidationError

from auth.database import AuthDatabase
from auth.exceptions import CredentialsSigninError, UserInactiveError
from auth.rate_limiter import RateLimiter
from auth.session import SessionManager
from auth.types import LoginCredentials, Session
from utils.passwords import verify_password

logger = logging.getLogger(__name__)


class CredentialsProvider:
    """Email/password sign-in."""

    def __init__(
        self,
        auth_db: AuthDatabase,
        session_manager: SessionManager,
        rate_limiter: RateLimiter,
    ):
        self._auth_db = auth_db
        self._session_manager = session_manager
        self._rate_limiter = rate_limiter

    def sign_in(self, email: str | None, password: str | None) -> Session:
        """Verify credentials and create a session.

        Raises:
            CredentialsSigninError: Malformed input, unknown email or wrong password.
            RateLimitedError: Too many attempts for this email.
            UserInactiveError: Account deactivated.
        """
        try:
            credentials = LoginCredentials(email=email, password=password)
        except ValidationError:
            raise CredentialsSigninError("Malformed credentials")

        self._rate_limiter.check_rate_limit(credentials.email)

        user = self._auth_db.get_user_by_email(credentials.email)
        if user is None or not verify_password(credentials.password, user.password_hash):
            logger.info("Login rejected: invalid credentials")
            raise CredentialsSigninError("Invalid email or password")

        if not user.is_active:
            logger.info(f"Login rejected: user {user.id} inactive")
            raise UserInactiveError("User account is deactivated")

        self._rate_limiter.reset_rate_limit(credentials.email)
        session = self._session_manager.create_session(user.id)
        logger.info(f"User {user.id} signed in")
        return session
