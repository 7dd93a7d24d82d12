"""
Record of every verified Stripe webhook delivery.

Stripe retries deliveries and may send the same event more than once; the
event id is unique here, so PaymentService.handle_webhook can tell a
redelivery of an already handled event apart from a new one.
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from core.models import BaseModel
from payments.state_machines import WebhookEventStatus


class WebhookEvent(BaseModel):
    """
    One Stripe event and the outcome of handling it.

    Fields:
        stripe_event_id: Stripe's event id (evt_...)
        event_type: e.g. "payment_intent.succeeded"
        payload: Event body as verified
        status: pending until handled, then processed or failed
        processed_at: Set when handling succeeds
        error_message: Last handler error; cleared on success

    A failed event is handled again when Stripe redelivers it.
    """

    stripe_event_id = models.CharField(
        max_length=255,
        unique=True,
        help_text="Stripe event id",
    )
    event_type = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Stripe event type",
    )
    payload = models.JSONField(
        help_text="Verified event body",
    )
    status = models.CharField(
        max_length=20,
        choices=WebhookEventStatus.choices,
        default=WebhookEventStatus.PENDING,
        db_index=True,
    )
    processed_at = models.DateTimeField(null=True, blank=True)
    error_message = models.TextField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "webhook event"
        verbose_name_plural = "webhook events"
        indexes = [
            models.Index(fields=["event_type", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.event_type} {self.stripe_event_id} ({self.status})"

    @property
    def is_processed(self) -> bool:
        return self.status == WebhookEventStatus.PROCESSED

    def get_object(self) -> dict:
        """The event's data.object, usually a PaymentIntent."""
        return (self.payload.get("data") or {}).get("object") or {}

    def get_object_id(self) -> str | None:
        return self.get_object().get("id")

    # Callers save after marking

    def mark_processed(self) -> None:
        self.status = WebhookEventStatus.PROCESSED
        self.processed_at = timezone.now()
        self.error_message = None

    def mark_failed(self, error_message: str) -> None:
        self.status = WebhookEventStatus.FAILED
        self.error_message = error_message
