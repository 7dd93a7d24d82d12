"""
Webhook handling for payment events from Stripe.

Handlers are registered by event type and dispatched from
PaymentService.handle_webhook. The HTTP endpoint lives in
payments.webhooks.views.
"""

from payments.webhooks.handlers import WEBHOOK_HANDLERS, dispatch_webhook, register_handler

__all__ = [
    "WEBHOOK_HANDLERS",
    "dispatch_webhook",
    "register_handler",
]
