"""
Custom validators shared by services and DRF serializers.

Usage:
    from core.validators import validate_object_id

    order_id = validate_object_id(request.data.get("orderId"), "Invalid order ID format")
"""

from __future__ import annotations

from core.exceptions import InvalidObjectIdError
from core.helpers import is_valid_object_id


def validate_object_id(value: object, message: str = "Invalid ID format") -> str:
    """
    Ensure a value is a 24-character hex identifier.

    Args:
        value: Candidate identifier
        message: Error message used when the value is malformed

    Returns:
        The identifier, lowercased

    Raises:
        InvalidObjectIdError: If value is not 24 hex characters
    """
    if not is_valid_object_id(value):
        raise InvalidObjectIdError(message, details={"id": str(value)})
    return str(value).lower()
