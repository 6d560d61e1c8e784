"""Typed exceptions for auth failures.

Every AuthError carries a `type`: the failure kind reported by the identity
provider. Callers classify on `type`, never on message text.
"""


class AuthError(Exception):
    """Base class for authentication/authorization errors."""

    type = "AuthError"


class CredentialsSigninError(AuthError):
    """
    Email/password pair rejected.

    Raised for malformed credentials, unknown email and wrong password alike,
    so responses never reveal which one it was.
    """

    type = "CredentialsSignin"


class RateLimitedError(AuthError):
    """Too many attempts. Client should wait before retrying."""

    type = "RateLimited"

    def __init__(self, retry_after_seconds: int):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(f"Rate limited. Retry after {retry_after_seconds} seconds.")


class UserInactiveError(AuthError):
    """User account is deactivated. Login not permitted."""

    type = "AccessDenied"


class SessionExpiredError(AuthError):
    """Session has expired and user must re-authenticate."""

    type = "SessionExpired"
