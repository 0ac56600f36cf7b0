"""
Service errors and the DRF exception handler.

Domain services raise ``ServiceError`` subclasses carrying a machine readable
``code``; the handler turns every exception reaching DRF into the
``{"success": false, "error": {...}}`` envelope.
"""

from __future__ import annotations

import logging
from typing import Any

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied  # type: ignore
from django.http import Http404  # type: ignore
from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler, set_rollback  # type: ignore
from rest_framework_simplejwt.exceptions import InvalidToken  # type: ignore

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Business rule violation raised by domain services."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "BAD_REQUEST"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "CONFLICT"


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "FORBIDDEN"


def error_response(
    code: str,
    message: Any,
    status_code: int,
    details: Any | None = None,
    headers: dict[str, str] | None = None,
) -> Response:
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return Response({"success": False, "error": error}, status=status_code, headers=headers)


def _first_message(detail: Any) -> str:
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    return str(detail)


def _token_error_code(exc: InvalidToken) -> str:
    detail = exc.detail if isinstance(exc.detail, dict) else {}
    for item in detail.get("messages", []):
        message = str(item.get("message", "")).lower()
        if "expired" in message and "invalid" not in message:
            return "TOKEN_EXPIRED"
    return "INVALID_TOKEN"


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    """Render every API error as ``{"success": false, "error": {...}}``."""
    if isinstance(exc, ServiceError):
        set_rollback()
        return error_response(exc.code, exc.message, exc.status_code, exc.details)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("Unhandled API error in %s", view.__class__.__name__ if view else "unknown view")
        set_rollback()
        return error_response(
            "SERVER_ERROR",
            "Internal server error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    headers = {}
    for header in ("WWW-Authenticate", "Retry-After"):
        if header in response:
            headers[header] = response[header]

    if isinstance(exc, exceptions.ValidationError):
        return error_response(
            "VALIDATION_ERROR",
            _first_message(exc.detail),
            response.status_code,
            details=exc.detail,
        )
    if isinstance(exc, InvalidToken):
        return error_response(
            _token_error_code(exc), "Invalid or expired token", status.HTTP_401_UNAUTHORIZED, headers=headers
        )
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return error_response("UNAUTHORIZED", _first_message(exc.detail), response.status_code, headers=headers)
    if isinstance(exc, exceptions.PermissionDenied):
        return error_response("FORBIDDEN", _first_message(exc.detail), response.status_code)
    if isinstance(exc, exceptions.NotFound):
        return error_response("NOT_FOUND", _first_message(exc.detail), response.status_code)
    if isinstance(exc, exceptions.Throttled):
        return error_response(
            "RATE_LIMIT_EXCEEDED", _first_message(exc.detail), response.status_code, headers=headers
        )
    if isinstance(exc, exceptions.MethodNotAllowed):
        return error_response("METHOD_NOT_ALLOWED", _first_message(exc.detail), response.status_code)

    code = getattr(exc, "default_code", "error")
    return error_response(str(code).upper(), _first_message(response.data), response.status_code)
