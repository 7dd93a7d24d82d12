"""
Payments app configuration.

This app provides Stripe payment processing:
- Gateway settings (test/live credentials) managed by admins
- PaymentIntents and refunds through StripeAdapter
- Idempotent webhook handling
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
