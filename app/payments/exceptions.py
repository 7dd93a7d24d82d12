"""
Errors raised by the payments app.

StripeAdapter converts stripe library errors into StripeError subclasses so
nothing outside payments.adapters imports stripe.

    PaymentError                      500
        StripeError
            StripeCardDeclinedError
            StripeInvalidRequestError
            StripeAuthenticationError
            StripeRateLimitError
            StripeAPIUnavailableError
            StripeTimeoutError
        RefundFailedError
    GatewayNotConfiguredError         400
    SignatureInvalidError             400
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import BaseApplicationError, ValidationError

if TYPE_CHECKING:
    from typing import Any


class PaymentError(BaseApplicationError):
    default_error_code: str = "PAYMENT_ERROR"
    status_code: int = 500


class GatewayNotConfiguredError(ValidationError):
    """No active Stripe gateway setting, or the active one lacks a secret key."""

    default_error_code: str = "GATEWAY_NOT_CONFIGURED"


class SignatureInvalidError(BaseApplicationError):
    default_error_code: str = "SIGNATURE_INVALID"
    status_code: int = 400


class StripeError(PaymentError):
    """
    A failed Stripe API call.

    stripe_code and decline_code come from the provider error and are copied
    into details for the error response.
    """

    default_error_code: str = "STRIPE_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        stripe_code: str | None = None,
        decline_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if stripe_code:
            details["stripe_code"] = stripe_code
        if decline_code:
            details["decline_code"] = decline_code
        super().__init__(message, error_code=error_code, details=details)
        self.stripe_code = stripe_code
        self.decline_code = decline_code


class StripeCardDeclinedError(StripeError):
    default_error_code: str = "CARD_DECLINED"


class StripeInvalidRequestError(StripeError):
    """
    Stripe refused the parameters.

    Refunds of an already refunded charge, or for more than remains, land
    here with Stripe's own wording as the message.
    """

    default_error_code: str = "INVALID_STRIPE_REQUEST"


class StripeAuthenticationError(StripeError):
    default_error_code: str = "STRIPE_AUTHENTICATION_FAILED"


class StripeRateLimitError(StripeError):
    default_error_code: str = "STRIPE_RATE_LIMITED"


class StripeAPIUnavailableError(StripeError):
    """Connection failure or a 5xx from Stripe."""

    default_error_code: str = "STRIPE_UNAVAILABLE"


class StripeTimeoutError(StripeError):
    """No answer within STRIPE_API_TIMEOUT_SECONDS; the call may still have gone through."""

    default_error_code: str = "STRIPE_TIMEOUT"


class RefundFailedError(PaymentError):
    """Stripe rejected a refund; message is the provider's text."""

    default_error_code: str = "REFUND_FAILED"


__all__ = [
    "GatewayNotConfiguredError",
    "PaymentError",
    "RefundFailedError",
    "SignatureInvalidError",
    "StripeAPIUnavailableError",
    "StripeAuthenticationError",
    "StripeCardDeclinedError",
    "StripeError",
    "StripeInvalidRequestError",
    "StripeRateLimitError",
    "StripeTimeoutError",
]
