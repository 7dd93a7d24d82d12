"""
GatewaySetting model for payment gateway credentials.

One row per gateway. The Payment Bridge reads the active Stripe row on
every operation through payments.gateway.GatewayConfigProvider; nothing
caches it between requests, so admin changes apply immediately.

Usage:
    from payments.models import GatewaySetting

    setting = GatewaySetting.objects.get(gateway="stripe")
    setting.secret_key        # mode-specific secret key
    setting.webhook_secret    # mode-specific webhook secret
"""

from __future__ import annotations

from django.db import models

from core.model_mixins import ObjectIdPrimaryKeyMixin
from core.models import BaseModel
from payments.state_machines import GatewayMode, GatewayName


class GatewaySetting(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    Credentials and mode for one payment gateway.

    Fields:
        gateway: stripe, paypal or cod (unique)
        mode: test or live; selects which key set is used
        test_* / live_*: Secret, publishable and webhook-signing keys
        is_active: Whether the gateway is enabled (off by default)
    """

    gateway = models.CharField(
        max_length=20,
        choices=GatewayName.choices,
        unique=True,
        help_text="Payment gateway",
    )
    mode = models.CharField(
        max_length=10,
        choices=GatewayMode.choices,
        default=GatewayMode.TEST,
        help_text="Which key set is in use",
    )

    # ==========================================================================
    # Test Keys
    # ==========================================================================

    test_secret_key = models.CharField(max_length=255, blank=True, default="")
    test_publishable_key = models.CharField(max_length=255, blank=True, default="")
    test_webhook_secret = models.CharField(max_length=255, blank=True, default="")

    # ==========================================================================
    # Live Keys
    # ==========================================================================

    live_secret_key = models.CharField(max_length=255, blank=True, default="")
    live_publishable_key = models.CharField(max_length=255, blank=True, default="")
    live_webhook_secret = models.CharField(max_length=255, blank=True, default="")

    is_active = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Whether this gateway is enabled",
    )

    class Meta:
        ordering = ["gateway"]
        verbose_name = "gateway setting"
        verbose_name_plural = "gateway settings"

    def __str__(self) -> str:
        state = "active" if self.is_active else "inactive"
        return f"GatewaySetting({self.gateway}, {self.mode}, {state})"

    @property
    def is_live(self) -> bool:
        return self.mode == GatewayMode.LIVE

    @property
    def secret_key(self) -> str:
        return self.live_secret_key if self.is_live else self.test_secret_key

    @property
    def publishable_key(self) -> str:
        return self.live_publishable_key if self.is_live else self.test_publishable_key

    @property
    def webhook_secret(self) -> str:
        return self.live_webhook_secret if self.is_live else self.test_webhook_secret
