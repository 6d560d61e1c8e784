"""Authentication service - credential check for the login form."""

import logging
from dataclasses import dataclass
from typing import Mapping

from auth.exceptions import AuthError, CredentialsSigninError
from auth.provider import CredentialsProvider
from auth.session import SessionManager
from auth.types import Session

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_FAILURE_MESSAGE = "Something went wrong."


@dataclass
class AuthenticateResult:
    """Result of a login attempt. Exactly one of session/error_message is set."""

    session: Session | None = None
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.session is not None


class AuthService:
    """Maps identity provider outcomes onto the login form's message set."""

    def __init__(self, provider: CredentialsProvider, session_manager: SessionManager):
        self._provider = provider
        self._session_manager = session_manager

    def authenticate(self, form: Mapping[str, str | None]) -> AuthenticateResult:
        """Sign in with a submitted login form.

        Returns:
            AuthenticateResult with the new session, or with one of
            "Invalid credentials." / "Something went wrong."

        Raises:
            Anything the provider raises that is not an AuthError.
        """
        try:
            session = self._provider.sign_in(form.get("email"), form.get("password"))
        except AuthError as e:
            if e.type == CredentialsSigninError.type:
                return AuthenticateResult(error_message=INVALID_CREDENTIALS_MESSAGE)
            logger.warning(f"Login failed with {e.type}: {e}")
            return AuthenticateResult(error_message=GENERIC_FAILURE_MESSAGE)

        return AuthenticateResult(session=session)

    def logout(self, session_token: str) -> None:
        """Revoke session. Safe to call with invalid token."""
        self._session_manager.revoke_session(session_token)

    def validate_session(self, token: str) -> Session:
        """Validate session token.

        Raises:
            SessionExpiredError: If session invalid or expired.
        """
        return self._session_manager.validate_session(token)
