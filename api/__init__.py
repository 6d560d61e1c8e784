"""HTTP surface of the invoice dashboard: response envelope, routers, handlers."""

from api.base import APIResponse, ErrorCodes, error_json, error_response, success_response
