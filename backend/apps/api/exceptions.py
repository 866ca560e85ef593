from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from django.core.exceptions import (
    PermissionDenied as DjangoPermissionDenied,
    ValidationError as DjangoValidationError,
)
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    Throttled,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import domain_error_response, error_response
from apps.common import get_logger
from apps.common.errors import DomainError

logger = get_logger(__name__).bind(component="api", layer="exception")

GENERIC_SERVER_MESSAGE = "Something went wrong"
FORWARDED_HEADERS = ("WWW-Authenticate", "Retry-After", "Allow")

# First match wins; (exception types, code, fallback message)
FRAMEWORK_ERRORS: Tuple[Tuple[tuple, str, str], ...] = (
    ((ValidationError,), "VALIDATION_ERROR", "Validation failed"),
    ((ParseError,), "VALIDATION_ERROR", "Malformed request"),
    ((NotAuthenticated, AuthenticationFailed), "UNAUTHORIZED", "Authentication required"),
    (
        (PermissionDenied, DjangoPermissionDenied),
        "FORBIDDEN",
        "You do not have permission to perform this action",
    ),
    ((NotFound, Http404), "NOT_FOUND", "Resource not found"),
    ((MethodNotAllowed,), "METHOD_NOT_ALLOWED", "Method not allowed"),
    ((Throttled,), "TOO_MANY_REQUESTS", "Request was throttled"),
)


class ApplicationError(DomainError):
    """A one-off domain error whose code and status are chosen at the raise site."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message, details=details, hint=hint)
        self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra

    def to_response(self) -> Response:
        return domain_error_response(self, extra=self.extra)


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Render every exception raised in a DRF view as the error envelope."""
    log = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        log.info("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()
    if isinstance(exc, DomainError):
        log.info("Handled domain error", code=exc.code, status=exc.status_code)
        return domain_error_response(exc)

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(getattr(exc, "message_dict", None) or list(exc.messages))

    response = drf_exception_handler(exc, context)
    if response is None:
        log.exception("Unhandled exception bubbled to global handler")
        return error_response(
            "SERVER_ERROR",
            GENERIC_SERVER_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, message, details, hint = _classify(exc, response)
    log.info("Converted API exception", code=code, status=response.status_code)
    headers = {name: response[name] for name in FORWARDED_HEADERS if response.has_header(name)}
    return error_response(
        code,
        message,
        details,
        http_status=response.status_code,
        hint=hint,
        headers=headers or None,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view is not None:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _classify(
    exc: Exception, response: Response
) -> Tuple[str, str, Optional[Any], Optional[str]]:
    payload = response.data
    if response.status_code >= 500:
        return "SERVER_ERROR", GENERIC_SERVER_MESSAGE, None, None
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR", "Validation failed", payload, None
    if isinstance(exc, Throttled) and exc.wait is not None:
        return (
            "TOO_MANY_REQUESTS",
            _detail_text(payload, "Request was throttled"),
            {"retryAfter": exc.wait},
            "Wait before retrying this request.",
        )
    for types, code, fallback in FRAMEWORK_ERRORS:
        if isinstance(exc, types):
            return code, _detail_text(payload, fallback), None, None
    return "UNKNOWN_ERROR", _detail_text(payload, "Request failed"), None, None


def _detail_text(payload: Any, fallback: str) -> str:
    if isinstance(payload, dict):
        payload = payload.get("detail")
    elif isinstance(payload, list) and payload:
        payload = payload[0]
    if isinstance(payload, str) and payload.strip():
        return str(payload)
    return fallback


__all__ = ["ApplicationError", "global_exception_handler"]
