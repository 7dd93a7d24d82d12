"""
Payment model: local record of a Stripe PaymentIntent.

Created as pending when an intent is created for an order; moved to
succeeded/failed by confirm() and by webhooks.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from core.model_mixins import ObjectIdPrimaryKeyMixin
from core.models import BaseModel
from payments.state_machines import PaymentStatus


class Payment(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    A PaymentIntent created for an order.

    Fields:
        user: Customer who started the payment
        order: Order being paid
        payment_intent_id: Stripe PaymentIntent ID (pi_xxx), unique
        amount: Amount in major units
        currency: ISO 4217 code
        status: pending, succeeded or failed
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="payments",
        help_text="Customer who started the payment",
    )
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="payments",
        help_text="Order being paid",
    )
    payment_intent_id = models.CharField(
        max_length=255,
        unique=True,
        help_text="Stripe PaymentIntent ID (pi_xxx)",
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Amount in major units",
    )
    currency = models.CharField(
        max_length=3,
        default="usd",
        help_text="ISO 4217 currency code",
    )
    status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        db_index=True,
        help_text="Local payment status",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "payment"
        verbose_name_plural = "payments"
        indexes = [
            models.Index(fields=["order", "-created_at"]),
        ]

    def __str__(self) -> str:
        return f"Payment({self.payment_intent_id}, {self.amount} {self.currency}, {self.status})"
