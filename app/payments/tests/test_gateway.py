"""
Tests for GatewayConfigProvider.
"""

import pytest

from payments.exceptions import GatewayNotConfiguredError
from payments.gateway import GatewayConfigProvider
from payments.state_machines import GatewayMode, GatewayName
from payments.tests.factories import GatewaySettingFactory


@pytest.mark.django_db
class TestResolve:
    def test_returns_test_mode_credentials(self, stripe_gateway):
        config = GatewayConfigProvider.resolve()

        assert config.gateway == GatewayName.STRIPE
        assert config.mode == GatewayMode.TEST
        assert config.secret_key == "sk_test_123"
        assert config.publishable_key == "pk_test_123"
        assert config.webhook_secret == "whsec_test_123"

    def test_live_mode_uses_live_keys(self):
        GatewaySettingFactory(
            mode=GatewayMode.LIVE,
            live_secret_key="sk_live_999",
            live_publishable_key="pk_live_999",
            live_webhook_secret="whsec_live_999",
        )

        config = GatewayConfigProvider.resolve()

        assert config.secret_key == "sk_live_999"
        assert config.publishable_key == "pk_live_999"
        assert config.webhook_secret == "whsec_live_999"

    def test_no_setting_raises(self):
        with pytest.raises(GatewayNotConfiguredError) as exc_info:
            GatewayConfigProvider.resolve()

        assert exc_info.value.message == "Stripe payment gateway is not configured or active"
        assert exc_info.value.status_code == 400

    def test_inactive_setting_raises(self):
        GatewaySettingFactory(is_active=False)

        with pytest.raises(GatewayNotConfiguredError):
            GatewayConfigProvider.resolve()

    def test_missing_secret_for_mode_raises(self):
        GatewaySettingFactory(mode=GatewayMode.LIVE)

        with pytest.raises(GatewayNotConfiguredError) as exc_info:
            GatewayConfigProvider.resolve()

        assert exc_info.value.message == "Stripe live secret key is missing"

    def test_reads_current_row_each_call(self, stripe_gateway):
        GatewayConfigProvider.resolve()

        stripe_gateway.test_secret_key = "sk_test_rotated"
        stripe_gateway.save()

        assert GatewayConfigProvider.resolve().secret_key == "sk_test_rotated"


@pytest.mark.django_db
class TestResolveWebhookSecret:
    @pytest.fixture(autouse=True)
    def fallback_secret(self, settings):
        settings.STRIPE_WEBHOOK_SECRET = "whsec_fallback"

    def test_uses_mode_specific_secret(self, stripe_gateway):
        assert GatewayConfigProvider.resolve_webhook_secret() == "whsec_test_123"

    def test_falls_back_without_active_setting(self):
        assert GatewayConfigProvider.resolve_webhook_secret() == "whsec_fallback"

    def test_falls_back_when_mode_secret_empty(self):
        GatewaySettingFactory(test_webhook_secret="")

        assert GatewayConfigProvider.resolve_webhook_secret() == "whsec_fallback"
