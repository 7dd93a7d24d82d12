"""
Tests for PaymentService.handle_webhook and the webhook handlers.

Tests cover:
- Signature handling and secret resolution
- Event recording and duplicate delivery
- payment_intent.succeeded / payment_failed / canceled handling
- Unknown event types
"""

from unittest.mock import patch

import pytest
from django.test import override_settings

from orders.models import OrderStatus
from payments.exceptions import SignatureInvalidError
from payments.models import WebhookEvent
from payments.services import PaymentService
from payments.state_machines import PaymentStatus, WebhookEventStatus
from payments.tests.factories import WebhookEventFactory
from payments.webhooks import dispatch_webhook

VERIFY = "payments.services.StripeAdapter.verify_webhook_signature"
SIGNATURE = "t=1614556800,v1=abc123"


def deliver(event: dict) -> WebhookEvent:
    with patch(VERIFY, return_value=event):
        return PaymentService.handle_webhook(b"{}", SIGNATURE)


# =============================================================================
# Signature & Recording
# =============================================================================


@pytest.mark.django_db
class TestHandleWebhookSignature:
    def test_missing_signature_raises(self, stripe_gateway):
        with patch(VERIFY) as verify:
            with pytest.raises(SignatureInvalidError):
                PaymentService.handle_webhook(b"{}", None)

        verify.assert_not_called()

    def test_invalid_signature_propagates(self, stripe_gateway):
        with patch(VERIFY, side_effect=SignatureInvalidError("bad signature")):
            with pytest.raises(SignatureInvalidError):
                PaymentService.handle_webhook(b"{}", SIGNATURE)

        assert not WebhookEvent.objects.exists()

    def test_verifies_with_mode_specific_secret(self, stripe_gateway, stripe_event):
        with patch(VERIFY, return_value=stripe_event("customer.created")) as verify:
            PaymentService.handle_webhook(b"{}", SIGNATURE)

        verify.assert_called_once_with(b"{}", SIGNATURE, "whsec_test_123")

    @override_settings(STRIPE_WEBHOOK_SECRET="whsec_fallback")
    def test_verifies_with_fallback_secret_without_setting(self, stripe_event):
        with patch(VERIFY, return_value=stripe_event("customer.created")) as verify:
            PaymentService.handle_webhook(b"{}", SIGNATURE)

        assert verify.call_args.args[2] == "whsec_fallback"

    def test_records_event(self, stripe_gateway, stripe_event):
        event = deliver(stripe_event("customer.created"))

        assert event.stripe_event_id == "evt_test123456"
        assert event.event_type == "customer.created"
        assert event.status == WebhookEventStatus.PROCESSED
        assert event.processed_at is not None


# =============================================================================
# payment_intent.succeeded
# =============================================================================


@pytest.mark.django_db
class TestPaymentIntentSucceeded:
    def test_marks_payment_and_order_paid(self, stripe_gateway, stripe_event, payment):
        deliver(stripe_event())

        payment.refresh_from_db()
        order = payment.order
        order.refresh_from_db()
        assert payment.status == PaymentStatus.SUCCEEDED
        assert order.is_paid is True
        assert order.paid_at is not None
        assert order.status == OrderStatus.PROCESSING
        assert order.payment_result["id"] == "pi_test123456"

    def test_keeps_existing_payment_result_id(self, stripe_gateway, stripe_event, payment):
        order = payment.order
        order.payment_result = {"id": "pi_client_reported", "status": "succeeded"}
        order.save()

        deliver(stripe_event())

        order.refresh_from_db()
        assert order.payment_result["id"] == "pi_client_reported"

    def test_without_local_payment_is_acknowledged(self, stripe_gateway, stripe_event, order):
        event = deliver(stripe_event(payment_intent_id="pi_unknown"))

        order.refresh_from_db()
        assert event.status == WebhookEventStatus.PROCESSED
        assert order.is_paid is False

    def test_cancelled_order_left_unchanged(self, stripe_gateway, stripe_event, payment):
        order = payment.order
        order.status = OrderStatus.CANCELLED
        order.save()

        event = deliver(stripe_event())

        order.refresh_from_db()
        payment.refresh_from_db()
        assert event.status == WebhookEventStatus.PROCESSED
        assert payment.status == PaymentStatus.SUCCEEDED
        assert order.status == OrderStatus.CANCELLED
        assert order.is_paid is False

    def test_duplicate_delivery_not_reprocessed(self, stripe_gateway, stripe_event, payment):
        deliver(stripe_event())

        with patch("payments.services.dispatch_webhook") as dispatch:
            event = deliver(stripe_event())

        dispatch.assert_not_called()
        assert event.status == WebhookEventStatus.PROCESSED
        assert WebhookEvent.objects.count() == 1

    def test_second_event_for_same_intent_reapplies(self, stripe_gateway, stripe_event, payment):
        deliver(stripe_event(event_id="evt_first"))
        deliver(stripe_event(event_id="evt_second"))

        order = payment.order
        order.refresh_from_db()
        assert order.is_paid is True
        assert order.status == OrderStatus.PROCESSING

    def test_failed_event_is_retried_on_redelivery(self, stripe_gateway, stripe_event, payment):
        WebhookEventFactory(
            stripe_event_id="evt_test123456",
            payment_intent_id="pi_test123456",
            status=WebhookEventStatus.FAILED,
            error_message="boom",
        )

        event = deliver(stripe_event())

        assert event.status == WebhookEventStatus.PROCESSED
        assert event.error_message is None


# =============================================================================
# Other Event Types
# =============================================================================


@pytest.mark.django_db
class TestOtherEvents:
    def test_payment_failed_marks_payment_failed(self, stripe_gateway, stripe_event, payment):
        deliver(
            stripe_event(
                "payment_intent.payment_failed",
                last_payment_error={"message": "Your card was declined."},
            )
        )

        payment.refresh_from_db()
        payment.order.refresh_from_db()
        assert payment.status == PaymentStatus.FAILED
        assert payment.order.is_paid is False

    def test_canceled_marks_payment_failed(self, stripe_gateway, stripe_event, payment):
        deliver(stripe_event("payment_intent.canceled"))

        payment.refresh_from_db()
        assert payment.status == PaymentStatus.FAILED

    def test_unknown_event_acknowledged(self, stripe_gateway, stripe_event, payment):
        event = deliver(stripe_event("charge.dispute.created"))

        payment.refresh_from_db()
        assert event.status == WebhookEventStatus.PROCESSED
        assert payment.status == PaymentStatus.PENDING

    def test_missing_object_id_fails_event(self, db):
        event = WebhookEventFactory(payload={"id": "evt_x", "type": "payment_intent.succeeded"})

        result = dispatch_webhook(event)

        assert not result
        assert result.error_code == "INVALID_WEBHOOK_PAYLOAD"
