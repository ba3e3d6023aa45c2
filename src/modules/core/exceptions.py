"""Standardised API error format.

Every error response body has the shape::

    {"type": "<kind>", "errors": [{"code": "...", "detail": "..."}]}

``standard_exception_handler`` is installed as DRF's ``EXCEPTION_HANDLER``
so framework errors (auth, validation, throttling, 404) follow the same
format as the domain errors returned by views via ``error_response``.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from rest_framework import status as http_status
from rest_framework.exceptions import (
    AuthenticationFailed,
    NotAuthenticated,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def error_response(
    code: str,
    detail: str,
    status: int = http_status.HTTP_400_BAD_REQUEST,
    error_type: Optional[str] = None,
) -> Response:
    """Build a single-error response in the standard format."""
    return Response(
        {
            "type": error_type or _type_for_status(status),
            "errors": [{"code": code, "detail": detail}],
        },
        status=status,
    )


def standard_exception_handler(exc: Exception, context: dict) -> Optional[Response]:
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        errors = _flatten_validation_errors(exc.detail)
        error_type = "validation_error"
    else:
        code = _code_for(exc)
        detail = getattr(exc, "detail", str(exc))
        errors = [{"code": code, "detail": str(detail)}]
        error_type = _type_for_exception(exc, response.status_code)

    logger.info(
        "api.error",
        error_type=error_type,
        status_code=response.status_code,
    )
    response.data = {"type": error_type, "errors": errors}
    return response


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _code_for(exc: Exception) -> str:
    get_codes = getattr(exc, "get_codes", None)
    if callable(get_codes):
        codes = get_codes()
        if isinstance(codes, str):
            return codes
    return getattr(exc, "default_code", "error")


def _type_for_exception(exc: Exception, status: int) -> str:
    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        return "authentication_error"
    if isinstance(exc, PermissionDenied):
        return "permission_error"
    return _type_for_status(status)


def _type_for_status(status: int) -> str:
    if status == http_status.HTTP_404_NOT_FOUND:
        return "not_found"
    if status == http_status.HTTP_409_CONFLICT:
        return "conflict"
    if status == http_status.HTTP_401_UNAUTHORIZED:
        return "authentication_error"
    if status == http_status.HTTP_403_FORBIDDEN:
        return "permission_error"
    if status == http_status.HTTP_429_TOO_MANY_REQUESTS:
        return "throttled"
    if status >= 500:
        return "server_error"
    return "client_error"


def _flatten_validation_errors(detail: Any, field: str = "") -> list[dict[str, str]]:
    errors: list[dict[str, str]] = []
    if isinstance(detail, dict):
        for key, value in detail.items():
            prefix = f"{field}.{key}" if field else str(key)
            errors.extend(_flatten_validation_errors(value, prefix))
    elif isinstance(detail, list):
        for item in detail:
            errors.extend(_flatten_validation_errors(item, field))
    else:
        entry = {
            "code": getattr(detail, "code", "invalid") or "invalid",
            "detail": str(detail),
        }
        if field:
            entry["field"] = field
        errors.append(entry)
    return errors
