"""Exception handlers mapping uncaught errors onto the response envelope."""

import logging

import psycopg2
import redis
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from api.base import ErrorCodes, error_json

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """
    Install the app-wide handlers.

    ValueError is the services' "bad input" signal: messages containing
    "not found" become 404, anything else 400. A store that cannot be reached
    is 503; everything else is logged and reported as a bare 500.
    """

    @app.exception_handler(ValueError)
    async def on_value_error(request: Request, exc: ValueError):
        message = str(exc)
        if "not found" in message.lower():
            return error_json(404, ErrorCodes.NOT_FOUND, message)
        return error_json(400, ErrorCodes.INVALID_REQUEST, message)

    @app.exception_handler(RequestValidationError)
    async def on_request_validation_error(request: Request, exc: RequestValidationError):
        return error_json(422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    @app.exception_handler(psycopg2.OperationalError)
    @app.exception_handler(redis.ConnectionError)
    async def on_store_unavailable(request: Request, exc: Exception):
        logger.error(f"Store unavailable during {request.method} {request.url.path}: {exc}")
        return error_json(503, ErrorCodes.SERVICE_UNAVAILABLE, "A backing service is unavailable")

    @app.exception_handler(Exception)
    async def on_unhandled(request: Request, exc: Exception):
        logger.exception(f"Unhandled error during {request.method} {request.url.path}")
        return error_json(500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
