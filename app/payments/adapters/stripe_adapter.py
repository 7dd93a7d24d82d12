"""
Stripe API adapter.

Every call to the stripe library goes through StripeAdapter, which sets the
HTTP timeout (STRIPE_API_TIMEOUT_SECONDS), logs the call with its duration
and turns stripe errors into payments.exceptions.StripeError subclasses.
Results come back as plain dataclasses so services never handle
StripeObject instances.

Usage:
    from payments.adapters import StripeAdapter, CreatePaymentIntentParams

    result = StripeAdapter.create_payment_intent(
        CreatePaymentIntentParams(amount_cents=5000, currency="usd", metadata={"order_id": order.id}),
        api_key=config.secret_key,
    )

    refund = StripeAdapter.create_refund(
        "pi_xxx",
        api_key=config.secret_key,
        amount_cents=1500,
        idempotency_key=IdempotencyKeyGenerator.generate("return_refund", return_request.id),
    )
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, NoReturn

import stripe
from django.conf import settings

from payments.exceptions import (
    SignatureInvalidError,
    StripeAPIUnavailableError,
    StripeAuthenticationError,
    StripeCardDeclinedError,
    StripeInvalidRequestError,
    StripeRateLimitError,
    StripeTimeoutError,
)

# =============================================================================
# Data Types
# =============================================================================


@dataclass
class CreatePaymentIntentParams:
    """Amount in minor units (cents); metadata is attached to the intent."""

    amount_cents: int
    currency: str
    metadata: dict[str, str] = field(default_factory=dict)
    payment_method_types: list[str] = field(default_factory=lambda: ["card"])
    idempotency_key: str | None = None

    def __post_init__(self) -> None:
        if self.amount_cents <= 0:
            raise ValueError("amount_cents must be positive")
        if not self.currency:
            raise ValueError("currency is required")


@dataclass
class PaymentIntentResult:
    id: str
    status: str
    amount_cents: int
    currency: str
    client_secret: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    raw_response: dict[str, Any] = field(default_factory=dict)


@dataclass
class RefundResult:
    id: str
    amount_cents: int
    currency: str
    status: str
    payment_intent_id: str
    raw_response: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Idempotency Key Generator
# =============================================================================


class IdempotencyKeyGenerator:
    """
    Generate idempotency keys for Stripe API calls.

    Format: "{operation}:{entity_id}:{attempt}:{hash}"

    Example:
        key = IdempotencyKeyGenerator.generate("refund", return_request.id)
        # "refund:665f1c2e9b1d4a0012345678:1:a1b2c3d4"
    """

    @staticmethod
    def generate(operation: str, entity_id: str, attempt: int = 1) -> str:
        entity_str = str(entity_id)
        hash_input = f"{operation}:{entity_str}:{attempt}:{settings.SECRET_KEY}"
        short_hash = hashlib.sha256(hash_input.encode()).hexdigest()[:8]
        return f"{operation}:{entity_str}:{attempt}:{short_hash}"


# =============================================================================
# Stripe Adapter
# =============================================================================


class StripeAdapter:
    """
    Thin wrapper over the stripe library.

    The secret key is passed on every call because it comes from the active
    GatewaySetting row, which admins can switch between test and live mode
    at runtime. Nothing is stored on the class.

    Usage:
        result = StripeAdapter.create_payment_intent(params, api_key=key)
        result = StripeAdapter.retrieve_payment_intent("pi_xxx", api_key=key)
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def _stripe_call(cls, operation: str, **log_context: Any) -> Iterator[dict[str, Any]]:
        """
        Wrap one Stripe request: timeout, timing and error translation.

        The yielded dict is logged on success; callers add result ids to it.
        """
        timeout = getattr(settings, "STRIPE_API_TIMEOUT_SECONDS", 10)
        stripe.default_http_client = stripe.RequestsClient(timeout=timeout)

        context = {"operation": operation, **log_context}
        started = time.monotonic()
        try:
            yield context
        except stripe.StripeError as e:
            context["duration_ms"] = round((time.monotonic() - started) * 1000, 1)
            cls._raise_domain_error(e, context)

        context["duration_ms"] = round((time.monotonic() - started) * 1000, 1)
        cls.get_logger().info("Stripe %s succeeded", operation, extra=context)

    # =========================================================================
    # Payment Intents
    # =========================================================================

    @classmethod
    def create_payment_intent(
        cls,
        params: CreatePaymentIntentParams,
        api_key: str,
    ) -> PaymentIntentResult:
        """
        Create a card PaymentIntent; the result carries the client_secret.

        Raises:
            StripeError subclasses, see _raise_domain_error
        """
        with cls._stripe_call(
            "create_payment_intent",
            amount_cents=params.amount_cents,
            currency=params.currency,
            metadata=params.metadata,
        ) as context:
            intent = stripe.PaymentIntent.create(
                api_key=api_key,
                amount=params.amount_cents,
                currency=params.currency,
                metadata=params.metadata,
                payment_method_types=params.payment_method_types,
                idempotency_key=params.idempotency_key,
            )
            context["payment_intent_id"] = intent.id
        return cls._to_intent_result(intent)

    @classmethod
    def retrieve_payment_intent(cls, payment_intent_id: str, api_key: str) -> PaymentIntentResult:
        with cls._stripe_call("retrieve_payment_intent", payment_intent_id=payment_intent_id):
            intent = stripe.PaymentIntent.retrieve(payment_intent_id, api_key=api_key)
        return cls._to_intent_result(intent)

    # =========================================================================
    # Refunds
    # =========================================================================

    @classmethod
    def create_refund(
        cls,
        payment_intent_id: str,
        api_key: str,
        amount_cents: int | None = None,
        idempotency_key: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> RefundResult:
        """
        Refund a PaymentIntent, in full when amount_cents is None.

        Stripe rejects refunds of already refunded charges (and amounts above
        what is left) with an InvalidRequestError; its message is kept on the
        StripeInvalidRequestError so callers can recognise it.
        """
        refund_params: dict[str, Any] = {
            "payment_intent": payment_intent_id,
            "metadata": metadata or {},
        }
        if amount_cents is not None:
            refund_params["amount"] = amount_cents

        with cls._stripe_call(
            "create_refund",
            payment_intent_id=payment_intent_id,
            amount_cents=amount_cents,
            idempotency_key=idempotency_key,
        ) as context:
            refund = stripe.Refund.create(
                api_key=api_key,
                idempotency_key=idempotency_key,
                **refund_params,
            )
            context["refund_id"] = refund.id

        return RefundResult(
            id=refund.id,
            amount_cents=refund.amount,
            currency=refund.currency,
            status=refund.status,
            payment_intent_id=refund.payment_intent,
            raw_response=refund.to_dict(),
        )

    # =========================================================================
    # Webhooks
    # =========================================================================

    @classmethod
    def verify_webhook_signature(
        cls,
        payload: bytes,
        signature: str,
        webhook_secret: str,
    ) -> dict[str, Any]:
        """
        Check the Stripe-Signature header and return the event as a dict.

        Raises:
            SignatureInvalidError: Bad signature, stale timestamp or bad JSON
        """
        try:
            stripe.Webhook.construct_event(payload, signature, webhook_secret)
        except (stripe.SignatureVerificationError, ValueError) as e:
            raise SignatureInvalidError(
                f"Webhook signature verification failed: {e}",
                details={"stripe_code": "signature_verification_failed"},
            ) from e
        # Plain dict for JSONField storage
        return json.loads(payload)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _to_intent_result(intent) -> PaymentIntentResult:
        return PaymentIntentResult(
            id=intent.id,
            status=intent.status,
            amount_cents=intent.amount,
            currency=intent.currency,
            client_secret=intent.client_secret,
            metadata=dict(intent.metadata or {}),
            raw_response=intent.to_dict(),
        )

    @classmethod
    def _raise_domain_error(cls, error: stripe.StripeError, context: dict[str, Any]) -> NoReturn:
        """
        Re-raise a stripe library error as a payments exception.

            CardError            StripeCardDeclinedError
            InvalidRequestError  StripeInvalidRequestError (provider message)
            AuthenticationError  StripeAuthenticationError
            RateLimitError       StripeRateLimitError
            APIConnectionError   StripeTimeoutError / StripeAPIUnavailableError
            anything else        StripeAPIUnavailableError
        """
        logger = cls.get_logger()
        message = getattr(error, "user_message", None) or str(error)
        code = getattr(error, "code", None)

        if isinstance(error, stripe.CardError):
            decline_code = getattr(error, "decline_code", None)
            logger.warning("Card declined", extra={**context, "decline_code": decline_code})
            raise StripeCardDeclinedError(
                message, stripe_code=code, decline_code=decline_code
            ) from error

        if isinstance(error, stripe.InvalidRequestError):
            logger.error("Stripe rejected request", extra={**context, "stripe_code": code})
            raise StripeInvalidRequestError(message, stripe_code=code) from error

        if isinstance(error, stripe.AuthenticationError):
            logger.critical("Stripe rejected the API key", extra=context)
            raise StripeAuthenticationError(
                "Stripe authentication failed", stripe_code="authentication_error"
            ) from error

        if isinstance(error, stripe.RateLimitError):
            logger.warning("Stripe rate limit hit", extra=context)
            raise StripeRateLimitError(
                "Stripe rate limit exceeded. Please retry.", stripe_code="rate_limit"
            ) from error

        if isinstance(error, stripe.APIConnectionError):
            logger.error("Stripe unreachable", extra=context, exc_info=True)
            if "timed out" in str(error).lower():
                raise StripeTimeoutError(
                    "Stripe request timed out. Please retry.", stripe_code="timeout"
                ) from error
            raise StripeAPIUnavailableError(
                "Could not connect to Stripe. Please retry.",
                stripe_code="api_connection_error",
            ) from error

        logger.error(
            "Stripe error %s", type(error).__name__, extra=context, exc_info=True
        )
        raise StripeAPIUnavailableError(
            f"Stripe service error: {message}", stripe_code="api_error"
        ) from error
