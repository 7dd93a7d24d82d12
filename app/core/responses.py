"""
Success envelope helpers for API views.

All successful responses share the shape:

    {"statusCode": 200, "data": {...}, "message": "Success"}

Usage:
    from core.responses import api_response

    return api_response({"order": serializer.data}, "Order created successfully", 201)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import status as http_status
from rest_framework.response import Response

if TYPE_CHECKING:
    from typing import Any


def envelope(data: Any = None, message: str = "Success", status_code: int = 200) -> dict[str, Any]:
    """Build the success envelope dict."""
    return {"statusCode": status_code, "data": data, "message": message}


def api_response(
    data: Any = None,
    message: str = "Success",
    status_code: int = http_status.HTTP_200_OK,
) -> Response:
    """
    Return a DRF Response wrapped in the success envelope.

    Args:
        data: Payload placed under "data"
        message: Human-readable message
        status_code: HTTP status (also echoed as statusCode)

    Returns:
        Response with envelope body and matching status
    """
    return Response(envelope(data, message, status_code), status=status_code)
