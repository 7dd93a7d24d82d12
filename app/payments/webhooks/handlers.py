"""
Stripe webhook handlers, keyed by event type.

PaymentService.handle_webhook records the event and calls dispatch_webhook,
which looks the type up in WEBHOOK_HANDLERS. Types without a handler are
acknowledged. A handler returns ServiceResult.failure for payloads it cannot
use; the event is then stored as failed and Stripe's redelivery retries it.

Usage:
    @register_handler("charge.refunded")
    def handle_charge_refunded(webhook_event: WebhookEvent) -> ServiceResult:
        ...
"""

from __future__ import annotations

import logging
from typing import Callable

from django.db import transaction

from core.services import ServiceResult
from orders.models import OrderStatus
from orders.services import OrderService
from payments.models import Payment, WebhookEvent
from payments.state_machines import PaymentStatus

logger = logging.getLogger(__name__)


WEBHOOK_HANDLERS: dict[str, Callable[[WebhookEvent], ServiceResult]] = {}


def register_handler(event_type: str) -> Callable:
    """Register the decorated function as the handler for event_type."""

    def decorator(func: Callable[[WebhookEvent], ServiceResult]) -> Callable:
        WEBHOOK_HANDLERS[event_type] = func
        return func

    return decorator


def dispatch_webhook(webhook_event: WebhookEvent) -> ServiceResult:
    handler = WEBHOOK_HANDLERS.get(webhook_event.event_type)
    log_extra = {
        "stripe_event_id": webhook_event.stripe_event_id,
        "event_type": webhook_event.event_type,
    }

    if handler is None:
        logger.info("Ignoring unhandled webhook event type", extra=log_extra)
        return ServiceResult.ok(None)

    logger.info("Dispatching webhook event", extra=log_extra)
    return handler(webhook_event)


def _missing_intent_id(webhook_event: WebhookEvent) -> ServiceResult:
    logger.error(
        "Webhook event has no PaymentIntent id",
        extra={
            "stripe_event_id": webhook_event.stripe_event_id,
            "event_type": webhook_event.event_type,
        },
    )
    return ServiceResult.failure(
        "Could not extract payment_intent_id from webhook",
        error_code="INVALID_WEBHOOK_PAYLOAD",
    )


# =============================================================================
# Payment Intent Handlers
# =============================================================================


@register_handler("payment_intent.succeeded")
def handle_payment_intent_succeeded(webhook_event: WebhookEvent) -> ServiceResult:
    """
    Handle successful payment confirmation.

    Marks the local Payment succeeded and the linked order paid. Intents
    without a local Payment are acknowledged and leave orders untouched.
    Cancelled orders are never marked paid.
    """
    payment_intent_id = webhook_event.get_object_id()
    if not payment_intent_id:
        return _missing_intent_id(webhook_event)

    log_extra = {
        "stripe_event_id": webhook_event.stripe_event_id,
        "payment_intent_id": payment_intent_id,
    }
    logger.info("Processing payment_intent.succeeded", extra=log_extra)

    with transaction.atomic():
        payment = (
            Payment.objects.select_for_update()
            .select_related("order")
            .filter(payment_intent_id=payment_intent_id)
            .first()
        )

        if not payment:
            logger.warning("Payment not found for payment_intent_id", extra=log_extra)
            return ServiceResult.ok(None)

        payment.status = PaymentStatus.SUCCEEDED
        payment.save(update_fields=["status", "updated_at"])

        order = payment.order
        if order.status == OrderStatus.CANCELLED:
            logger.warning(
                "Payment succeeded for a cancelled order, order left unchanged",
                extra={**log_extra, "order_id": order.id},
            )
            return ServiceResult.ok(payment)

        payment_result = dict(order.payment_result or {})
        if not payment_result.get("id"):
            payment_result["id"] = payment_intent_id
        payment_result.setdefault("status", "succeeded")

        OrderService.mark_paid(order, actor=None, payment_result=payment_result)

    return ServiceResult.ok(payment)


@register_handler("payment_intent.payment_failed")
def handle_payment_intent_failed(webhook_event: WebhookEvent) -> ServiceResult:
    """Mark the local Payment failed. The order is not changed."""
    payment_intent_id = webhook_event.get_object_id()
    if not payment_intent_id:
        return _missing_intent_id(webhook_event)

    last_error = webhook_event.get_object().get("last_payment_error") or {}
    reason = last_error.get("message", "Payment failed")

    updated = Payment.objects.filter(payment_intent_id=payment_intent_id).update(
        status=PaymentStatus.FAILED
    )

    logger.info(
        "Processed payment_intent.payment_failed",
        extra={
            "stripe_event_id": webhook_event.stripe_event_id,
            "payment_intent_id": payment_intent_id,
            "reason": reason,
            "local_payment_updated": bool(updated),
        },
    )
    return ServiceResult.ok(None)


@register_handler("payment_intent.canceled")
def handle_payment_intent_canceled(webhook_event: WebhookEvent) -> ServiceResult:
    payment_intent_id = webhook_event.get_object_id()
    if not payment_intent_id:
        return _missing_intent_id(webhook_event)

    Payment.objects.filter(payment_intent_id=payment_intent_id).update(
        status=PaymentStatus.from_provider("canceled")
    )
    logger.info(
        "Processed payment_intent.canceled",
        extra={
            "stripe_event_id": webhook_event.stripe_event_id,
            "payment_intent_id": payment_intent_id,
        },
    )
    return ServiceResult.ok(None)
