"""
Status enums for payment models.

These are Django TextChoices for database storage and admin integration.

Payment Statuses:
    pending → succeeded   (payment_intent.succeeded / confirm)
    pending → failed      (payment_intent.payment_failed / canceled intent)

WebhookEvent Statuses:
    pending → processed
    pending → failed
"""

from django.db import models


class PaymentStatus(models.TextChoices):
    """
    Local mirror of a Stripe PaymentIntent outcome.

    Provider statuses are collapsed by PaymentStatus.from_provider().
    """

    PENDING = "pending", "Pending"
    SUCCEEDED = "succeeded", "Succeeded"
    FAILED = "failed", "Failed"

    @classmethod
    def from_provider(cls, provider_status: str) -> "PaymentStatus":
        """
        Map a Stripe PaymentIntent status to a local status.

        succeeded → SUCCEEDED, canceled → FAILED, anything else → PENDING.
        """
        if provider_status == "succeeded":
            return cls.SUCCEEDED
        if provider_status == "canceled":
            return cls.FAILED
        return cls.PENDING


class WebhookEventStatus(models.TextChoices):
    """
    Processing status for received webhook events.

    Terminal states: PROCESSED
    """

    PENDING = "pending", "Pending"
    PROCESSED = "processed", "Processed"
    FAILED = "failed", "Failed"


class GatewayName(models.TextChoices):
    STRIPE = "stripe", "Stripe"
    PAYPAL = "paypal", "PayPal"
    COD = "cod", "Cash on delivery"


class GatewayMode(models.TextChoices):
    TEST = "test", "Test"
    LIVE = "live", "Live"
