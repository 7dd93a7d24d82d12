"""
Return workflow exceptions.

Exception Hierarchy:
    ValidationError (core)
    └── ReturnNotAllowedError - Order cannot be returned (400)

    BaseApplicationError (core)
    └── RefundProcessingFailedError - Stripe refund failed during Refunded transition (500)
"""

from __future__ import annotations

from core.exceptions import BaseApplicationError, ValidationError


class ReturnNotAllowedError(ValidationError):
    """
    Raised when a return request fails a business rule.

    Example:
        raise ReturnNotAllowedError("Only delivered orders can be returned")
    """

    default_error_code = "RETURN_NOT_ALLOWED"


class RefundProcessingFailedError(BaseApplicationError):
    """
    Raised when the automated Stripe refund fails.

    The return keeps its previous status.
    """

    default_error_code = "REFUND_PROCESSING_FAILED"
    status_code = 500
