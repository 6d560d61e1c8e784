"""Authentication and authorization modules."""

from auth.exceptions import (
    AuthError,
    CredentialsSigninError,
    RateLimitedError,
    SessionExpiredError,
    UserInactiveError,
)
from auth.types import User, StoredUser, Session, LoginCredentials
from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.rate_limiter import RateLimiter
from auth.session import SessionManager
from auth.provider import CredentialsProvider
from auth.service import AuthService, AuthenticateResult
from auth.security_middleware import AuthMiddleware
from auth.api import create_auth_router
