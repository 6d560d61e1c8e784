"""HTTP routes for the login form and the current session."""

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from api.base import ErrorCodes, error_json, success_response
from auth.config import AuthConfig
from auth.service import AuthService


def create_auth_router(auth_service: AuthService, config: AuthConfig) -> APIRouter:
    router = APIRouter(tags=["auth"])

    @router.post("/login")
    async def login(request: Request):
        """
        Sign in with the login form (email, password).

        Success sets the session cookie and redirects to the dashboard home.
        Failure answers 401 with the message the form should display.
        """
        form = await request.form()
        result = auth_service.authenticate(
            {"email": form.get("email"), "password": form.get("password")}
        )
        if not result.succeeded:
            return error_json(401, ErrorCodes.INVALID_CREDENTIALS, result.error_message)

        session = result.session
        response = RedirectResponse(url=config.home_path, status_code=303)
        response.set_cookie(
            key=config.session_cookie_name,
            value=session.token,
            max_age=int((session.expires_at - session.created_at).total_seconds()),
            httponly=True,
            secure=config.session_cookie_secure,
            samesite="lax",
        )
        return response

    @router.post("/logout")
    async def logout(request: Request):
        token = request.cookies.get(config.session_cookie_name)
        if token:
            auth_service.logout(token)

        response = RedirectResponse(url=config.login_path, status_code=303)
        response.delete_cookie(key=config.session_cookie_name)
        return response

    @router.get("/me")
    async def me(request: Request):
        # Only reached with a session; AuthMiddleware guards this path
        user_id = getattr(request.state, "user_id", None)
        if user_id is None:
            return error_json(401, ErrorCodes.NOT_AUTHENTICATED, "Authentication required")
        return success_response({"user_id": str(user_id)}).model_dump(mode="json")

    return router
