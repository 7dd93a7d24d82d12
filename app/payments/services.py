"""
Payment service for Stripe operations.

PaymentService is the entry point for everything that touches Stripe:
creating and confirming PaymentIntents, refunds and incoming webhooks.
Credentials are resolved from the active GatewaySetting on every call.

Related files:
    - gateway.py: GatewayConfigProvider (credentials)
    - adapters/stripe_adapter.py: StripeAdapter (API calls)
    - webhooks/handlers.py: Event-specific handlers

Usage:
    from payments.services import PaymentService

    intent = PaymentService.create_intent(user, order_id, Decimal("110.00"))
    # {"clientSecret": "pi_123_secret_456", "paymentIntentId": "pi_123"}

    status = PaymentService.confirm("pi_123")

    PaymentService.handle_webhook(request.body, request.headers["Stripe-Signature"])

    refund = PaymentService.refund("pi_123", amount=Decimal("15.00"))
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from django.conf import settings

from core.exceptions import ValidationError
from core.helpers import quantize_money, to_minor_units
from core.services import BaseService
from orders.services import OrderService
from payments.adapters import (
    CreatePaymentIntentParams,
    RefundResult,
    StripeAdapter,
)
from payments.exceptions import (
    RefundFailedError,
    SignatureInvalidError,
    StripeError,
)
from payments.gateway import GatewayConfigProvider
from payments.models import GatewaySetting, Payment, WebhookEvent
from payments.state_machines import PaymentStatus, WebhookEventStatus
from payments.webhooks.handlers import dispatch_webhook

if TYPE_CHECKING:
    from authentication.models import User


class PaymentService(BaseService):
    """
    Stripe payment operations.

    Methods:
        create_intent: Create a PaymentIntent for an order
        confirm: Sync local Payment status from Stripe
        handle_webhook: Verify, record and dispatch a webhook event
        refund: Full or partial refund of a PaymentIntent
    """

    # ==========================================================================
    # Payment Intents
    # ==========================================================================

    @classmethod
    def create_intent(cls, user: User, order_id: str, amount: Decimal) -> dict[str, str]:
        """
        Create a Stripe PaymentIntent for an order.

        Raises:
            InvalidObjectIdError: Malformed order id
            NotFoundError: Order does not exist
            PermissionDeniedError: User is neither owner nor admin
            GatewayNotConfiguredError: No active Stripe setting
            StripeError: Stripe rejected the request
        """
        order = OrderService.get_for_actor(order_id, user)
        config = GatewayConfigProvider.resolve()
        currency = getattr(settings, "STRIPE_CURRENCY", "usd")

        result = StripeAdapter.create_payment_intent(
            CreatePaymentIntentParams(
                amount_cents=to_minor_units(amount),
                currency=currency,
                metadata={"order_id": order.id},
            ),
            api_key=config.secret_key,
        )

        Payment.objects.create(
            user=user,
            order=order,
            payment_intent_id=result.id,
            amount=quantize_money(amount),
            currency=currency,
            status=PaymentStatus.PENDING,
        )

        cls.get_logger().info(
            "Payment intent created",
            extra={
                "order_id": order.id,
                "payment_intent_id": result.id,
                "amount_cents": result.amount_cents,
                "mode": config.mode,
            },
        )
        return {"clientSecret": result.client_secret, "paymentIntentId": result.id}

    @classmethod
    def confirm(cls, payment_intent_id: str) -> str:
        """
        Retrieve a PaymentIntent and sync the local Payment status.

        Returns the provider status. Intents without a local Payment are
        not an error.
        """
        config = GatewayConfigProvider.resolve()
        result = StripeAdapter.retrieve_payment_intent(payment_intent_id, api_key=config.secret_key)

        updated = Payment.objects.filter(payment_intent_id=payment_intent_id).update(
            status=PaymentStatus.from_provider(result.status)
        )

        cls.get_logger().info(
            "Payment intent confirmed",
            extra={
                "payment_intent_id": payment_intent_id,
                "provider_status": result.status,
                "local_payment_updated": bool(updated),
            },
        )
        return result.status

    # ==========================================================================
    # Refunds
    # ==========================================================================

    @classmethod
    def refund(
        cls,
        payment_intent_id: str,
        amount: Decimal | None = None,
        idempotency_key: str | None = None,
    ) -> RefundResult:
        """
        Refund a PaymentIntent.

        Args:
            payment_intent_id: Stripe PaymentIntent ID
            amount: Amount in major units; None refunds the full amount
            idempotency_key: Optional Stripe idempotency key

        Raises:
            GatewayNotConfiguredError: No active Stripe setting
            RefundFailedError: Stripe rejected the refund (provider message kept)
        """
        config = GatewayConfigProvider.resolve()
        amount_cents = to_minor_units(amount) if amount is not None else None

        try:
            result = StripeAdapter.create_refund(
                payment_intent_id,
                api_key=config.secret_key,
                amount_cents=amount_cents,
                idempotency_key=idempotency_key,
            )
        except StripeError as e:
            cls.get_logger().warning(
                "Stripe refund failed",
                extra={
                    "payment_intent_id": payment_intent_id,
                    "amount_cents": amount_cents,
                    "stripe_code": e.stripe_code,
                    "stripe_message": e.message,
                },
            )
            raise RefundFailedError(
                e.message,
                details={"payment_intent_id": payment_intent_id, "stripe_code": e.stripe_code},
            ) from e

        cls.get_logger().info(
            "Refund created",
            extra={
                "payment_intent_id": payment_intent_id,
                "refund_id": result.id,
                "amount_cents": result.amount_cents,
            },
        )
        return result

    # ==========================================================================
    # Webhooks
    # ==========================================================================

    @classmethod
    def handle_webhook(cls, payload: bytes, signature: str | None) -> WebhookEvent:
        """
        Verify, record and dispatch a Stripe webhook.

        Events are stored by Stripe event id. An event that was already
        processed is acknowledged without running its handler again.

        Raises:
            SignatureInvalidError: Missing or invalid Stripe-Signature
            ValidationError: Event has no id or type
        """
        logger = cls.get_logger()

        if not signature:
            logger.warning("Webhook received without Stripe-Signature header")
            raise SignatureInvalidError("Missing Stripe-Signature header")

        secret = GatewayConfigProvider.resolve_webhook_secret()
        event_data = StripeAdapter.verify_webhook_signature(payload, signature, secret)

        stripe_event_id = event_data.get("id")
        event_type = event_data.get("type")
        if not stripe_event_id or not event_type:
            raise ValidationError("Invalid webhook event", error_code="INVALID_WEBHOOK_PAYLOAD")

        logger.info(
            f"Received Stripe webhook: {event_type}",
            extra={"stripe_event_id": stripe_event_id, "event_type": event_type},
        )

        webhook_event, created = WebhookEvent.objects.get_or_create(
            stripe_event_id=stripe_event_id,
            defaults={
                "event_type": event_type,
                "payload": event_data,
                "status": WebhookEventStatus.PENDING,
            },
        )

        if not created and webhook_event.is_processed:
            logger.info(
                "Webhook already processed, acknowledging",
                extra={"stripe_event_id": stripe_event_id},
            )
            return webhook_event

        try:
            result = dispatch_webhook(webhook_event)
        except Exception as e:
            webhook_event.mark_failed(f"{type(e).__name__}: {e}")
            webhook_event.save(update_fields=["status", "error_message", "updated_at"])
            logger.error(
                "Webhook handler raised",
                extra={"stripe_event_id": stripe_event_id, "event_type": event_type},
                exc_info=True,
            )
            raise

        if result:
            webhook_event.mark_processed()
        else:
            webhook_event.mark_failed(result.error or "Unknown error")
            logger.error(
                "Webhook handler failed",
                extra={
                    "stripe_event_id": stripe_event_id,
                    "error": result.error,
                    "error_code": result.error_code,
                },
            )
        webhook_event.save(update_fields=["status", "processed_at", "error_message", "updated_at"])
        return webhook_event


class GatewaySettingService(BaseService):
    """Admin management of GatewaySetting rows."""

    @classmethod
    def list_all(cls):
        return GatewaySetting.objects.order_by("gateway")

    @classmethod
    def list_active(cls):
        return GatewaySetting.objects.filter(is_active=True).order_by("gateway")

    @classmethod
    def upsert(cls, gateway: str, **fields) -> GatewaySetting:
        """
        Create the setting for gateway or update the supplied fields.

        Fields that are not supplied keep their stored value.
        """
        with cls.atomic():
            setting, created = GatewaySetting.objects.select_for_update().get_or_create(
                gateway=gateway, defaults=fields
            )
            if not created and fields:
                for name, value in fields.items():
                    setattr(setting, name, value)
                setting.save()

        cls.get_logger().info(
            "Gateway setting saved",
            extra={
                "gateway": gateway,
                "was_created": created,
                "mode": setting.mode,
                "is_active": setting.is_active,
                "updated_fields": sorted(fields),
            },
        )
        return setting
