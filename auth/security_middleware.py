"""Session cookie enforcement for dashboard routes."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from api.base import ErrorCodes, error_json
from auth.exceptions import SessionExpiredError
from auth.session import SessionManager


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests to non-public paths that lack a live session.

    A valid session cookie puts `user_id` and `session` on request.state.
    The login and logout endpoints, the login page, the health check and the
    API docs are reachable without one.
    """

    PUBLIC_PATHS = (
        "/auth/login",
        "/auth/logout",
        "/login",
        "/health",
        "/docs",
        "/openapi.json",
    )

    def __init__(self, app, session_manager: SessionManager, cookie_name: str = "session_token"):
        super().__init__(app)
        self._session_manager = session_manager
        self._cookie_name = cookie_name

    def _is_public(self, path: str) -> bool:
        return any(path == p or path.startswith(f"{p}/") for p in self.PUBLIC_PATHS)

    async def dispatch(self, request: Request, call_next):
        if self._is_public(request.url.path):
            return await call_next(request)

        token = request.cookies.get(self._cookie_name)
        if not token:
            return error_json(401, ErrorCodes.NOT_AUTHENTICATED, "Authentication required")

        try:
            session = self._session_manager.validate_session(token)
        except SessionExpiredError:
            return error_json(401, ErrorCodes.SESSION_EXPIRED, "Session has expired")

        request.state.user_id = session.user_id
        request.state.session = session
        return await call_next(request)
