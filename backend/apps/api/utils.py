from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

from apps.common import errors

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

# Framework-level codes; every domain error contributes its own code below
ERROR_STATUS_MAP: Dict[str, int] = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "TOO_MANY_REQUESTS": status.HTTP_429_TOO_MANY_REQUESTS,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}
ERROR_STATUS_MAP.update(
    {
        cls.code: cls.status_code
        for cls in (getattr(errors, name) for name in errors.__all__)
        if cls is not errors.DomainError
    }
)


def _normalize_details(details: Any) -> Any:
    if isinstance(details, ValidationError):
        return as_serializer_error(details)
    if isinstance(details, Mapping):
        return dict(details)
    if isinstance(details, Exception):
        return {"type": details.__class__.__name__}
    return details


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    hint: Optional[str] = None,
    extra: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Build the API's error envelope: ``{"error": {code, message, status, ...}}``.

    Args:
        code: Machine-readable error identifier, upper-cased on output.
        message: Human-readable explanation.
        details: Optional context such as the offending product or field errors.
        http_status: Explicit status; otherwise looked up from ``ERROR_STATUS_MAP``.
        hint: Optional remediation advice for the client.
        extra: Optional additional machine-readable fields.
        headers: Optional response headers.
    """
    code = code.strip().upper() if isinstance(code, str) else ""
    message = message.strip() if isinstance(message, str) else ""
    if not code or not message:
        raise ValueError("error_response requires a non-empty code and message")
    for label, value in (("extra", extra), ("headers", headers)):
        if value is not None and not isinstance(value, Mapping):
            raise TypeError(f"error_response {label} must be a mapping if provided")

    status_code = int(
        http_status if http_status is not None else ERROR_STATUS_MAP.get(code, DEFAULT_ERROR_STATUS)
    )
    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    body: Dict[str, Any] = {"code": code, "message": message, "status": status_code}
    if details is not None:
        body["details"] = _normalize_details(details)
    if hint:
        body["hint"] = hint
    if extra:
        body["extra"] = dict(extra)

    return Response(
        {"error": body},
        status=status_code,
        headers={str(k): str(v) for k, v in headers.items()} if headers else None,
    )


def domain_error_response(
    exc: errors.DomainError, *, extra: Optional[Mapping[str, Any]] = None
) -> Response:
    """Render a domain error with the code, status and hint it carries."""
    return error_response(
        exc.code,
        exc.message,
        exc.details,
        http_status=exc.status_code,
        hint=exc.hint,
        extra=extra,
    )
