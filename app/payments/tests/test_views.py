"""
Tests for payment API views and the Stripe webhook endpoint.
"""

import json
from unittest.mock import patch

import pytest
from rest_framework import status

from payments.adapters import PaymentIntentResult, RefundResult
from payments.exceptions import SignatureInvalidError, StripeInvalidRequestError
from payments.models import GatewaySetting
from payments.state_machines import GatewayMode
from payments.tests.factories import GatewaySettingFactory

PAYMENT_URL = "/api/v1/payment/"
CREATE_INTENT_URL = f"{PAYMENT_URL}create-intent/"
CONFIRM_URL = f"{PAYMENT_URL}confirm/"
REFUND_URL = f"{PAYMENT_URL}refund/"
SETTINGS_URL = f"{PAYMENT_URL}settings/"
ACTIVE_URL = f"{PAYMENT_URL}active/"
WEBHOOK_URL = f"{PAYMENT_URL}webhook/"

ADAPTER = "payments.services.StripeAdapter"


# =============================================================================
# Intents
# =============================================================================


@pytest.mark.django_db
class TestCreateIntentView:
    def test_create_intent(self, authenticated_client, stripe_gateway, order):
        result = PaymentIntentResult(
            id="pi_test123456",
            status="requires_payment_method",
            amount_cents=11000,
            currency="usd",
            client_secret="pi_test123456_secret_abc123",
        )

        with patch(f"{ADAPTER}.create_payment_intent", return_value=result):
            response = authenticated_client.post(
                CREATE_INTENT_URL, {"orderId": order.id, "amount": "110.00"}, format="json"
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Payment intent created"
        assert response.data["data"] == {
            "clientSecret": "pi_test123456_secret_abc123",
            "paymentIntentId": "pi_test123456",
        }

    def test_unknown_order_returns_404(self, authenticated_client, stripe_gateway):
        response = authenticated_client.post(
            CREATE_INTENT_URL,
            {"orderId": "0123456789abcdef01234567", "amount": "10.00"},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_gateway_not_configured_returns_400(self, authenticated_client, order):
        response = authenticated_client.post(
            CREATE_INTENT_URL, {"orderId": order.id, "amount": "110.00"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["message"] == "Stripe payment gateway is not configured or active"

    def test_requires_authentication(self, api_client, order):
        response = api_client.post(
            CREATE_INTENT_URL, {"orderId": order.id, "amount": "110.00"}, format="json"
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestConfirmView:
    def test_confirm(self, authenticated_client, stripe_gateway, payment):
        result = PaymentIntentResult(
            id=payment.payment_intent_id, status="succeeded", amount_cents=11000, currency="usd"
        )

        with patch(f"{ADAPTER}.retrieve_payment_intent", return_value=result):
            response = authenticated_client.post(
                CONFIRM_URL, {"paymentIntentId": payment.payment_intent_id}, format="json"
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Payment confirmed"
        assert response.data["data"] == {"status": "succeeded"}


# =============================================================================
# Refunds
# =============================================================================


@pytest.mark.django_db
class TestRefundView:
    def test_admin_refund(self, admin_client, stripe_gateway):
        result = RefundResult(
            id="re_test123456",
            amount_cents=1500,
            currency="usd",
            status="succeeded",
            payment_intent_id="pi_test123456",
        )

        with patch(f"{ADAPTER}.create_refund", return_value=result) as create:
            response = admin_client.post(
                REFUND_URL, {"paymentIntentId": "pi_test123456", "amount": "15.00"}, format="json"
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Refund processed successfully"
        assert response.data["data"]["refund"]["id"] == "re_test123456"
        assert response.data["data"]["refund"]["amount"] == 1500
        assert create.call_args.kwargs["amount_cents"] == 1500

    def test_provider_failure_returns_500(self, admin_client, stripe_gateway):
        error = StripeInvalidRequestError("No such payment_intent: 'pi_missing'")

        with patch(f"{ADAPTER}.create_refund", side_effect=error):
            response = admin_client.post(REFUND_URL, {"paymentIntentId": "pi_missing"}, format="json")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data["message"] == "No such payment_intent: 'pi_missing'"

    def test_customer_forbidden(self, authenticated_client, stripe_gateway):
        response = authenticated_client.post(
            REFUND_URL, {"paymentIntentId": "pi_test123456"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Gateway Settings
# =============================================================================


@pytest.mark.django_db
class TestGatewaySettingsView:
    def test_admin_lists_settings_with_secrets(self, admin_client, stripe_gateway):
        response = admin_client.get(SETTINGS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Gateway settings retrieved"
        assert response.data["data"][0]["test_secret_key"] == "sk_test_123"

    def test_upsert_creates_setting(self, admin_client):
        response = admin_client.post(
            SETTINGS_URL,
            {"gateway": "stripe", "testSecretKey": "sk_test_new", "isActive": True},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Gateway settings updated"
        setting = GatewaySetting.objects.get(gateway="stripe")
        assert setting.test_secret_key == "sk_test_new"
        assert setting.is_active is True

    def test_upsert_partial_update(self, admin_client, stripe_gateway):
        response = admin_client.post(
            SETTINGS_URL,
            {"gateway": "stripe", "mode": "live", "liveSecretKey": "sk_live_999"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        stripe_gateway.refresh_from_db()
        assert stripe_gateway.mode == GatewayMode.LIVE
        assert stripe_gateway.live_secret_key == "sk_live_999"
        assert stripe_gateway.test_secret_key == "sk_test_123"
        assert GatewaySetting.objects.count() == 1

    def test_invalid_gateway_returns_400(self, admin_client):
        response = admin_client.post(SETTINGS_URL, {"gateway": "bitcoin"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_customer_forbidden(self, authenticated_client):
        response = authenticated_client.get(SETTINGS_URL)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["message"] == "Access forbidden"


@pytest.mark.django_db
class TestActiveGatewaysView:
    def test_lists_active_without_secrets(self, authenticated_client, stripe_gateway):
        GatewaySettingFactory(gateway="paypal", is_active=False)

        response = authenticated_client.get(ACTIVE_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Active gateways retrieved"
        assert response.data["data"] == [
            {
                "gateway": "stripe",
                "mode": "test",
                "test_publishable_key": "pk_test_123",
                "live_publishable_key": "",
                "is_active": True,
            }
        ]


# =============================================================================
# Webhook Endpoint
# =============================================================================


@pytest.mark.django_db
class TestStripeWebhookView:
    def post(self, client, payload: dict, **headers):
        return client.post(
            WEBHOOK_URL,
            data=json.dumps(payload),
            content_type="application/json",
            **headers,
        )

    def test_acknowledges_event(self, api_client, stripe_gateway, stripe_event, payment):
        event = stripe_event()

        with patch(f"{ADAPTER}.verify_webhook_signature", return_value=event):
            response = self.post(api_client, event, HTTP_STRIPE_SIGNATURE="t=1,v1=abc")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"received": True}
        payment.order.refresh_from_db()
        assert payment.order.is_paid is True

    def test_missing_signature_returns_400(self, api_client, stripe_gateway, stripe_event):
        response = self.post(api_client, stripe_event())

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["statusCode"] == 400

    def test_invalid_signature_returns_400(self, api_client, stripe_gateway, stripe_event):
        with patch(
            f"{ADAPTER}.verify_webhook_signature",
            side_effect=SignatureInvalidError("Webhook signature verification failed"),
        ):
            response = self.post(api_client, stripe_event(), HTTP_STRIPE_SIGNATURE="t=1,v1=bad")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Webhook signature verification failed"

    def test_get_not_allowed(self, api_client):
        response = api_client.get(WEBHOOK_URL)

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

