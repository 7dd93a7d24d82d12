"""
Tests for Stripe adapter.

Tests cover:
- Parameter validation
- Idempotency key generation
- Per-call API key and request parameters
- Error translation for each exception type
- Webhook signature verification
"""

import json
from unittest.mock import patch

import pytest
import stripe

from payments.adapters import (
    CreatePaymentIntentParams,
    IdempotencyKeyGenerator,
    StripeAdapter,
)
from payments.exceptions import (
    SignatureInvalidError,
    StripeAPIUnavailableError,
    StripeAuthenticationError,
    StripeCardDeclinedError,
    StripeInvalidRequestError,
    StripeRateLimitError,
    StripeTimeoutError,
)

PAYMENT_INTENT_CREATE = "payments.adapters.stripe_adapter.stripe.PaymentIntent.create"
PAYMENT_INTENT_RETRIEVE = "payments.adapters.stripe_adapter.stripe.PaymentIntent.retrieve"
REFUND_CREATE = "payments.adapters.stripe_adapter.stripe.Refund.create"
CONSTRUCT_EVENT = "payments.adapters.stripe_adapter.stripe.Webhook.construct_event"


def intent_params(**overrides):
    params = {"amount_cents": 5000, "currency": "usd", "metadata": {"order_id": "abc"}}
    params.update(overrides)
    return CreatePaymentIntentParams(**params)


# =============================================================================
# CreatePaymentIntentParams Tests
# =============================================================================


class TestCreatePaymentIntentParams:
    def test_defaults(self):
        params = intent_params()

        assert params.payment_method_types == ["card"]
        assert params.idempotency_key is None

    @pytest.mark.parametrize("amount", [0, -100])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValueError, match="amount_cents must be positive"):
            intent_params(amount_cents=amount)

    def test_currency_required(self):
        with pytest.raises(ValueError, match="currency is required"):
            intent_params(currency="")


# =============================================================================
# IdempotencyKeyGenerator Tests
# =============================================================================


class TestIdempotencyKeyGenerator:
    def test_key_format(self):
        key = IdempotencyKeyGenerator.generate("refund", "665f1c2e9b1d4a0012345678")

        operation, entity_id, attempt, digest = key.split(":")
        assert (operation, entity_id, attempt) == ("refund", "665f1c2e9b1d4a0012345678", "1")
        assert len(digest) == 8

    def test_same_inputs_produce_same_key(self):
        assert IdempotencyKeyGenerator.generate("refund", "x") == IdempotencyKeyGenerator.generate(
            "refund", "x"
        )

    def test_attempt_changes_key(self):
        first = IdempotencyKeyGenerator.generate("refund", "x", attempt=1)
        second = IdempotencyKeyGenerator.generate("refund", "x", attempt=2)

        assert first != second


# =============================================================================
# Successful Operations
# =============================================================================


class TestStripeAdapterOperations:
    def test_create_payment_intent_passes_api_key(self, mock_payment_intent):
        with patch(PAYMENT_INTENT_CREATE, return_value=mock_payment_intent(amount=5000)) as create:
            result = StripeAdapter.create_payment_intent(intent_params(), api_key="sk_test_abc")

        kwargs = create.call_args.kwargs
        assert kwargs["api_key"] == "sk_test_abc"
        assert kwargs["amount"] == 5000
        assert kwargs["currency"] == "usd"
        assert kwargs["metadata"] == {"order_id": "abc"}
        assert kwargs["payment_method_types"] == ["card"]
        assert result.id == "pi_test123456"
        assert result.client_secret == "pi_test123456_secret_abc123"
        assert result.amount_cents == 5000

    def test_retrieve_payment_intent(self, mock_payment_intent):
        with patch(
            PAYMENT_INTENT_RETRIEVE, return_value=mock_payment_intent(status="succeeded")
        ) as retrieve:
            result = StripeAdapter.retrieve_payment_intent("pi_test123456", api_key="sk_test_abc")

        retrieve.assert_called_once_with("pi_test123456", api_key="sk_test_abc")
        assert result.status == "succeeded"

    def test_full_refund_omits_amount(self, mock_refund):
        with patch(REFUND_CREATE, return_value=mock_refund()) as create:
            result = StripeAdapter.create_refund("pi_test123456", api_key="sk_test_abc")

        kwargs = create.call_args.kwargs
        assert kwargs["payment_intent"] == "pi_test123456"
        assert "amount" not in kwargs
        assert result.id == "re_test123456"
        assert result.payment_intent_id == "pi_test123456"

    def test_partial_refund_sends_amount_and_key(self, mock_refund):
        with patch(REFUND_CREATE, return_value=mock_refund(amount=1500)) as create:
            result = StripeAdapter.create_refund(
                "pi_test123456",
                api_key="sk_test_abc",
                amount_cents=1500,
                idempotency_key="refund:abc:1:deadbeef",
            )

        kwargs = create.call_args.kwargs
        assert kwargs["amount"] == 1500
        assert kwargs["idempotency_key"] == "refund:abc:1:deadbeef"
        assert result.amount_cents == 1500


# =============================================================================
# Error Translation
# =============================================================================


class TestStripeAdapterErrorTranslation:
    def test_card_error(self):
        error = stripe.CardError("Your card was declined.", None, "card_declined")

        with patch(PAYMENT_INTENT_CREATE, side_effect=error):
            with pytest.raises(StripeCardDeclinedError) as exc_info:
                StripeAdapter.create_payment_intent(intent_params(), api_key="sk_test_abc")

        assert exc_info.value.stripe_code == "card_declined"

    def test_invalid_request_keeps_provider_message(self):
        error = stripe.InvalidRequestError(
            "Charge ch_123 has already been refunded.", None, code="charge_already_refunded"
        )

        with patch(REFUND_CREATE, side_effect=error):
            with pytest.raises(StripeInvalidRequestError) as exc_info:
                StripeAdapter.create_refund("pi_test123456", api_key="sk_test_abc")

        assert "already been refunded" in exc_info.value.message
        assert exc_info.value.stripe_code == "charge_already_refunded"

    def test_authentication_error(self):
        with patch(PAYMENT_INTENT_RETRIEVE, side_effect=stripe.AuthenticationError("bad key")):
            with pytest.raises(StripeAuthenticationError):
                StripeAdapter.retrieve_payment_intent("pi_x", api_key="sk_test_bad")

    def test_rate_limit_error(self):
        with patch(PAYMENT_INTENT_CREATE, side_effect=stripe.RateLimitError("slow down")):
            with pytest.raises(StripeRateLimitError) as exc_info:
                StripeAdapter.create_payment_intent(intent_params(), api_key="sk_test_abc")

        assert exc_info.value.stripe_code == "rate_limit"
        assert exc_info.value.status_code == 500

    def test_connection_timeout(self):
        error = stripe.APIConnectionError("Request timed out")

        with patch(PAYMENT_INTENT_CREATE, side_effect=error):
            with pytest.raises(StripeTimeoutError):
                StripeAdapter.create_payment_intent(intent_params(), api_key="sk_test_abc")

    def test_connection_error(self):
        error = stripe.APIConnectionError("Network unreachable")

        with patch(PAYMENT_INTENT_CREATE, side_effect=error):
            with pytest.raises(StripeAPIUnavailableError):
                StripeAdapter.create_payment_intent(intent_params(), api_key="sk_test_abc")

    def test_api_error(self):
        with patch(REFUND_CREATE, side_effect=stripe.APIError("Internal error")):
            with pytest.raises(StripeAPIUnavailableError) as exc_info:
                StripeAdapter.create_refund("pi_x", api_key="sk_test_abc")

        assert exc_info.value.stripe_code == "api_error"


# =============================================================================
# Webhook Signature
# =============================================================================


class TestVerifyWebhookSignature:
    def test_valid_signature_returns_event_dict(self, stripe_event):
        payload = json.dumps(stripe_event()).encode()

        with patch(CONSTRUCT_EVENT) as construct:
            result = StripeAdapter.verify_webhook_signature(payload, "t=1,v1=abc", "whsec_test")

        construct.assert_called_once_with(payload, "t=1,v1=abc", "whsec_test")
        assert isinstance(result, dict)
        assert result["id"] == "evt_test123456"
        assert result["data"]["object"]["id"] == "pi_test123456"

    def test_invalid_signature_raises(self):
        error = stripe.SignatureVerificationError("No signatures found", "t=1,v1=abc")

        with patch(CONSTRUCT_EVENT, side_effect=error):
            with pytest.raises(SignatureInvalidError):
                StripeAdapter.verify_webhook_signature(b"{}", "t=1,v1=abc", "whsec_test")

    def test_malformed_payload_raises(self):
        with patch(CONSTRUCT_EVENT, side_effect=ValueError("Invalid payload")):
            with pytest.raises(SignatureInvalidError):
                StripeAdapter.verify_webhook_signature(b"not json", "t=1,v1=abc", "whsec_test")
