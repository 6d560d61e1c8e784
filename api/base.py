"""
Response envelope shared by every dashboard endpoint.

Success and failure bodies have the same shape:
    {"success": bool, "data": ..., "error": {"code", "message"} | null,
     "meta": {"timestamp", "request_id"}}

Failures that carry form state (field errors plus a message) put that state
in `data` so the form can redisplay it.
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from utils.timezone import now_utc


class APIError(BaseModel):
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Message suitable for display")


class APIMeta(BaseModel):
    timestamp: datetime = Field(..., description="Response timestamp (UTC)")
    request_id: str = Field(..., description="Identifier for correlating logs")


class APIResponse(BaseModel):
    success: bool
    data: Any | None = None
    error: APIError | None = None
    meta: APIMeta


def _meta() -> APIMeta:
    return APIMeta(timestamp=now_utc(), request_id=str(uuid4()))


def success_response(data: Any) -> APIResponse:
    return APIResponse(success=True, data=data, meta=_meta())


def error_response(code: str, message: str, data: Any | None = None) -> APIResponse:
    return APIResponse(
        success=False,
        data=data,
        error=APIError(code=code, message=message),
        meta=_meta(),
    )


def error_json(status_code: int, code: str, message: str, data: Any | None = None) -> JSONResponse:
    """error_response rendered as a JSONResponse with the given status."""
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message, data).model_dump(mode="json"),
    )


class ErrorCodes:
    """Values of error.code in failure responses."""

    # Sign-in and sessions
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    NOT_FOUND = "NOT_FOUND"

    # Request and form problems
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Store write rejected or failed
    MUTATION_FAILED = "MUTATION_FAILED"

    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
