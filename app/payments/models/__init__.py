"""
Payment domain models.

This module contains all payment-related models:
- GatewaySetting: Admin-managed payment gateway credentials
- Payment: Local record of a Stripe PaymentIntent for an order
- WebhookEvent: Stripe webhook event tracking for idempotent processing
"""

from payments.models.gateway_setting import GatewaySetting
from payments.models.payment import Payment
from payments.models.webhook_event import WebhookEvent

__all__ = [
    "GatewaySetting",
    "Payment",
    "WebhookEvent",
]
