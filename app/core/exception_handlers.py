"""
DRF exception handler producing the uniform error envelope.

Every error leaving the API has the shape:

    {"statusCode": 404, "message": "Order not found"}

Field validation failures additionally carry the serializer errors:

    {"statusCode": 400, "message": "items: This field is required.",
     "errors": {"items": ["This field is required."]}}

Mapping:
    - core.exceptions.BaseApplicationError subclasses: their status_code
    - DRF APIException subclasses (auth, throttling, parse errors): their status
    - Django Http404 / PermissionDenied: 404 / 403 (via DRF defaults)
    - Anything else: 500 "Internal server error", logged with traceback

Configuration:
    REST_FRAMEWORK = {
        "EXCEPTION_HANDLER": "core.exception_handlers.api_exception_handler",
    }
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    from typing import Any


logger = logging.getLogger(__name__)


def _first_error_message(detail: Any) -> str:
    """Flatten nested serializer errors into a single readable message."""
    if isinstance(detail, dict):
        if not detail:
            return "Validation failed"
        field_name, value = next(iter(detail.items()))
        message = _first_error_message(value)
        if field_name == "non_field_errors":
            return message
        return f"{field_name}: {message}"
    if isinstance(detail, (list, tuple)):
        for value in detail:
            message = _first_error_message(value)
            if message:
                return message
        return "Validation failed"
    return str(detail)


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    """
    Convert any exception raised by a view into the error envelope.

    Args:
        exc: The raised exception
        context: DRF handler context (view, request, args, kwargs)

    Returns:
        Response carrying {"statusCode", "message"} and the matching status
    """
    view = context.get("view")
    log_context = {
        "view": view.__class__.__name__ if view else None,
        "exception": exc.__class__.__name__,
    }

    if isinstance(exc, BaseApplicationError):
        if exc.status_code >= 500:
            logger.error(exc.message, extra={**log_context, "error_code": exc.error_code})
        else:
            logger.info(exc.message, extra={**log_context, "error_code": exc.error_code})
        payload = {"statusCode": exc.status_code, "message": exc.message}
        if exc.details:
            payload["details"] = exc.details
        return Response(payload, status=exc.status_code)

    response = drf_exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, drf_exceptions.ValidationError):
            response.data = {
                "statusCode": response.status_code,
                "message": _first_error_message(exc.detail),
                "errors": exc.detail,
            }
        else:
            detail = getattr(exc, "detail", None) or str(exc)
            response.data = {
                "statusCode": response.status_code,
                "message": _first_error_message(detail),
            }
        return response

    logger.error("Unhandled exception in API view", extra=log_context, exc_info=exc)
    return Response(
        {
            "statusCode": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "message": "Internal server error",
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
