"""
Webhook endpoint view for Stripe.

The view reads the raw body and Stripe-Signature header and hands them to
PaymentService.handle_webhook, which verifies, records and dispatches the
event synchronously.

Usage:
    # In urls.py
    from payments.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhook/", stripe_webhook, name="webhook"),
    ]
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from core.exceptions import BaseApplicationError
from payments.services import PaymentService

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def stripe_webhook(request: HttpRequest) -> JsonResponse:
    """
    Receive Stripe webhook events.

    Security:
    - Signature verification prevents spoofed webhooks
    - CSRF exemption required for external webhooks
    - Only POST requests accepted

    Idempotency:
    - WebhookEvent.stripe_event_id is unique
    - Redelivered events that were processed return 200 without reprocessing

    Returns:
        JsonResponse with status:
        - 200: {"received": true} (new, duplicate or ignored event)
        - 400: Missing or invalid signature, malformed event
    """
    signature = request.headers.get("Stripe-Signature")

    try:
        PaymentService.handle_webhook(request.body, signature)
    except BaseApplicationError as e:
        logger.warning(
            "Webhook rejected",
            extra={"error_code": e.error_code, "error": e.message},
        )
        return JsonResponse(e.to_dict(), status=e.status_code)

    return JsonResponse({"received": True})
