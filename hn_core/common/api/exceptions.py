# backend/hn_core/common/api/exceptions.py
"""
DRF exception handler producing the project error envelope:

    {"error": {"code": ..., "message": ..., "details": ..., "request_id": ...}}

Authorization denials carry a fixed message and no details, whatever the
raising code put in the exception.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

PERMISSION_DENIED_MESSAGE = "You do not have permission to perform this action."

# Checked in order; the first isinstance match names the code.
_ERROR_CODES: tuple[tuple[type, str], ...] = (
    (exceptions.ValidationError, "validation_error"),
    (exceptions.NotAuthenticated, "not_authenticated"),
    (exceptions.AuthenticationFailed, "not_authenticated"),
    (exceptions.PermissionDenied, "permission_denied"),
    (DjangoPermissionDenied, "permission_denied"),
    (Http404, "not_found"),
    (exceptions.NotFound, "not_found"),
)

# Response headers worth keeping from DRF's own response.
_PASSTHROUGH_HEADERS = ("WWW-Authenticate", "Retry-After", "Allow")


def ensure_request_id(request) -> str:
    """Return request.request_id, assigning a fresh one on first use."""
    rid = getattr(request, "request_id", None) if request is not None else None
    if rid:
        return rid
    rid = uuid.uuid4().hex
    if request is not None:
        request.request_id = rid
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": ensure_request_id(request),
        }
    }


def error_code_for(exc: Exception, http_status: int) -> str:
    for exc_type, code in _ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    if isinstance(exc, exceptions.APIException):
        return exc.default_code or "api_error"
    return "server_error" if http_status >= 500 else "error"


def _split_detail(data: Any) -> tuple[str, Any]:
    if isinstance(data, dict) and "detail" in data:
        extra = {k: v for k, v in data.items() if k != "detail"}
        return str(data["detail"]), extra or None
    return "Request failed.", data


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")
    response = drf_exception_handler(exc, context)

    if response is None:
        logger.error("unhandled API error", exc_info=(type(exc), exc, exc.__traceback__))
        return Response(
            build_error_envelope(request=request, code="server_error", message="Unexpected server error."),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code = error_code_for(exc, response.status_code)
    if code == "permission_denied":
        message, details = PERMISSION_DENIED_MESSAGE, None
    else:
        message, details = _split_detail(response.data)

    headers = {h: response[h] for h in _PASSTHROUGH_HEADERS if response.has_header(h)}
    return Response(
        build_error_envelope(request=request, code=code, message=message, details=details),
        status=response.status_code,
        headers=headers,
    )
