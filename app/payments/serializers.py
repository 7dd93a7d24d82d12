"""
DRF serializers for payments app.

Request serializers accept the storefront's camelCase payloads
(orderId, paymentIntentId, testSecretKey, ...).

Usage:
    serializer = CreateIntentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from payments.models import GatewaySetting
from payments.state_machines import GatewayMode, GatewayName

MONEY = {"max_digits": 12, "decimal_places": 2}


# =============================================================================
# Payment Intents & Refunds
# =============================================================================


class CreateIntentSerializer(serializers.Serializer):
    orderId = serializers.CharField()
    amount = serializers.DecimalField(min_value=Decimal("0.01"), **MONEY)


class ConfirmPaymentSerializer(serializers.Serializer):
    paymentIntentId = serializers.CharField()


class RefundRequestSerializer(serializers.Serializer):
    """Omitting amount refunds the full PaymentIntent."""

    paymentIntentId = serializers.CharField()
    amount = serializers.DecimalField(required=False, allow_null=True, min_value=Decimal("0.01"), **MONEY)


class RefundSerializer(serializers.Serializer):
    """Serializes a RefundResult."""

    id = serializers.CharField(read_only=True)
    amount = serializers.IntegerField(source="amount_cents", read_only=True)
    currency = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    payment_intent = serializers.CharField(source="payment_intent_id", read_only=True)


# =============================================================================
# Gateway Settings
# =============================================================================


class GatewaySettingSerializer(serializers.ModelSerializer):
    """Full gateway setting, secrets included (admin only)."""

    class Meta:
        model = GatewaySetting
        fields = [
            "id",
            "gateway",
            "mode",
            "test_secret_key",
            "test_publishable_key",
            "test_webhook_secret",
            "live_secret_key",
            "live_publishable_key",
            "live_webhook_secret",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ActiveGatewaySerializer(serializers.ModelSerializer):
    """Client-safe view of an active gateway: no secrets."""

    class Meta:
        model = GatewaySetting
        fields = ["gateway", "mode", "test_publishable_key", "live_publishable_key", "is_active"]
        read_only_fields = fields


class GatewaySettingUpsertSerializer(serializers.Serializer):
    """
    POST /payment/settings/ payload.

    Only gateway is required; omitted fields keep their stored value.
    """

    FIELD_MAP = {
        "mode": "mode",
        "testSecretKey": "test_secret_key",
        "testPublishableKey": "test_publishable_key",
        "testWebhookSecret": "test_webhook_secret",
        "liveSecretKey": "live_secret_key",
        "livePublishableKey": "live_publishable_key",
        "liveWebhookSecret": "live_webhook_secret",
        "isActive": "is_active",
    }

    gateway = serializers.ChoiceField(choices=GatewayName.choices)
    mode = serializers.ChoiceField(choices=GatewayMode.choices, required=False)
    testSecretKey = serializers.CharField(required=False, allow_blank=True)
    testPublishableKey = serializers.CharField(required=False, allow_blank=True)
    testWebhookSecret = serializers.CharField(required=False, allow_blank=True)
    liveSecretKey = serializers.CharField(required=False, allow_blank=True)
    livePublishableKey = serializers.CharField(required=False, allow_blank=True)
    liveWebhookSecret = serializers.CharField(required=False, allow_blank=True)
    isActive = serializers.BooleanField(required=False)

    def to_model_fields(self) -> dict:
        """Supplied fields only, keyed by model field name."""
        return {
            model_field: self.validated_data[key]
            for key, model_field in self.FIELD_MAP.items()
            if key in self.validated_data
        }
