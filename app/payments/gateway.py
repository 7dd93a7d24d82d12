"""
Gateway configuration resolution.

GatewayConfigProvider reads the active GatewaySetting for a gateway and
returns an immutable GatewayConfig. It is resolved once per operation and
handed to StripeAdapter as the per-call api_key, so admin changes to the
settings take effect on the next request.

Usage:
    from payments.gateway import GatewayConfigProvider

    config = GatewayConfigProvider.resolve()
    StripeAdapter.retrieve_payment_intent("pi_123", api_key=config.secret_key)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.conf import settings

from payments.exceptions import GatewayNotConfiguredError
from payments.models import GatewaySetting
from payments.state_machines import GatewayName

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayConfig:
    """Credentials for one gateway in its selected mode."""

    gateway: str
    mode: str
    secret_key: str
    publishable_key: str
    webhook_secret: str


class GatewayConfigProvider:
    """Resolve gateway credentials from GatewaySetting rows."""

    @classmethod
    def get_active_setting(cls, gateway: str = GatewayName.STRIPE) -> GatewaySetting | None:
        return GatewaySetting.objects.filter(gateway=gateway, is_active=True).first()

    @classmethod
    def resolve(cls, gateway: str = GatewayName.STRIPE) -> GatewayConfig:
        """
        Return the active configuration for gateway.

        Raises:
            GatewayNotConfiguredError: No active setting, or the secret key
                for the selected mode is empty
        """
        setting = cls.get_active_setting(gateway)
        if setting is None:
            raise GatewayNotConfiguredError("Stripe payment gateway is not configured or active")

        if not setting.secret_key:
            raise GatewayNotConfiguredError(f"Stripe {setting.mode} secret key is missing")

        return GatewayConfig(
            gateway=setting.gateway,
            mode=setting.mode,
            secret_key=setting.secret_key,
            publishable_key=setting.publishable_key,
            webhook_secret=setting.webhook_secret,
        )

    @classmethod
    def resolve_webhook_secret(cls, gateway: str = GatewayName.STRIPE) -> str:
        """
        Webhook signing secret for the active setting's mode.

        Falls back to settings.STRIPE_WEBHOOK_SECRET (with a warning) when
        there is no active setting or it has no secret for its mode.
        """
        setting = cls.get_active_setting(gateway)
        if setting is not None and setting.webhook_secret:
            return setting.webhook_secret

        logger.warning(
            "No webhook secret configured for gateway, falling back to STRIPE_WEBHOOK_SECRET",
            extra={
                "gateway": gateway,
                "mode": setting.mode if setting else None,
                "has_active_setting": setting is not None,
            },
        )
        return settings.STRIPE_WEBHOOK_SECRET
