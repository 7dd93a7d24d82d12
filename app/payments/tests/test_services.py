"""
Tests for PaymentService intents, confirmation and refunds.

StripeAdapter is patched at the service boundary; webhook handling is
covered in test_webhooks.py.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from core.exceptions import InvalidObjectIdError, NotFoundError, PermissionDeniedError
from payments.adapters import PaymentIntentResult, RefundResult
from payments.exceptions import (
    GatewayNotConfiguredError,
    RefundFailedError,
    StripeInvalidRequestError,
)
from payments.models import Payment
from payments.services import GatewaySettingService, PaymentService
from payments.state_machines import GatewayMode, PaymentStatus
from payments.tests.factories import GatewaySettingFactory

ADAPTER = "payments.services.StripeAdapter"


def intent_result(status="requires_payment_method", amount_cents=11000):
    return PaymentIntentResult(
        id="pi_test123456",
        status=status,
        amount_cents=amount_cents,
        currency="usd",
        client_secret="pi_test123456_secret_abc123",
    )


def refund_result(amount_cents=11000):
    return RefundResult(
        id="re_test123456",
        amount_cents=amount_cents,
        currency="usd",
        status="succeeded",
        payment_intent_id="pi_test123456",
    )


# =============================================================================
# TestCreateIntent
# =============================================================================


@pytest.mark.django_db
class TestCreateIntent:
    def test_creates_intent_and_pending_payment(self, stripe_gateway, user, order):
        with patch(f"{ADAPTER}.create_payment_intent", return_value=intent_result()) as create:
            result = PaymentService.create_intent(user, order.id, Decimal("110.00"))

        assert result == {
            "clientSecret": "pi_test123456_secret_abc123",
            "paymentIntentId": "pi_test123456",
        }
        params = create.call_args.args[0]
        assert params.amount_cents == 11000
        assert params.currency == "usd"
        assert params.metadata == {"order_id": order.id}
        assert create.call_args.kwargs["api_key"] == "sk_test_123"

        payment = Payment.objects.get(payment_intent_id="pi_test123456")
        assert payment.order == order
        assert payment.user == user
        assert payment.amount == Decimal("110.00")
        assert payment.status == PaymentStatus.PENDING

    def test_amount_rounded_half_up_to_cents(self, stripe_gateway, user, order):
        with patch(f"{ADAPTER}.create_payment_intent", return_value=intent_result()) as create:
            PaymentService.create_intent(user, order.id, Decimal("10.005"))

        assert create.call_args.args[0].amount_cents == 1001

    def test_admin_can_create_for_any_order(self, stripe_gateway, admin_user, order):
        with patch(f"{ADAPTER}.create_payment_intent", return_value=intent_result()):
            PaymentService.create_intent(admin_user, order.id, Decimal("110.00"))

        assert Payment.objects.get().user == admin_user

    def test_unknown_order_raises_not_found(self, stripe_gateway, user):
        with patch(f"{ADAPTER}.create_payment_intent") as create:
            with pytest.raises(NotFoundError):
                PaymentService.create_intent(user, "0123456789abcdef01234567", Decimal("10"))

        create.assert_not_called()

    def test_malformed_order_id_raises(self, stripe_gateway, user):
        with pytest.raises(InvalidObjectIdError):
            PaymentService.create_intent(user, "not-an-id", Decimal("10"))

    def test_other_users_order_forbidden(self, stripe_gateway, other_user, order):
        with pytest.raises(PermissionDeniedError):
            PaymentService.create_intent(other_user, order.id, Decimal("110.00"))

    def test_requires_active_gateway(self, user, order):
        with pytest.raises(GatewayNotConfiguredError):
            PaymentService.create_intent(user, order.id, Decimal("110.00"))

        assert not Payment.objects.exists()


# =============================================================================
# TestConfirm
# =============================================================================


@pytest.mark.django_db
class TestConfirm:
    @pytest.mark.parametrize(
        ("provider_status", "expected"),
        [
            ("succeeded", PaymentStatus.SUCCEEDED),
            ("canceled", PaymentStatus.FAILED),
            ("requires_action", PaymentStatus.PENDING),
        ],
    )
    def test_syncs_local_status(self, stripe_gateway, payment, provider_status, expected):
        with patch(
            f"{ADAPTER}.retrieve_payment_intent", return_value=intent_result(status=provider_status)
        ):
            status = PaymentService.confirm(payment.payment_intent_id)

        assert status == provider_status
        payment.refresh_from_db()
        assert payment.status == expected

    def test_unknown_intent_is_a_no_op(self, stripe_gateway):
        with patch(
            f"{ADAPTER}.retrieve_payment_intent", return_value=intent_result(status="succeeded")
        ):
            assert PaymentService.confirm("pi_unknown") == "succeeded"

        assert not Payment.objects.exists()


# =============================================================================
# TestRefund
# =============================================================================


@pytest.mark.django_db
class TestRefund:
    def test_full_refund(self, stripe_gateway):
        with patch(f"{ADAPTER}.create_refund", return_value=refund_result()) as create:
            result = PaymentService.refund("pi_test123456")

        assert result.id == "re_test123456"
        create.assert_called_once_with(
            "pi_test123456",
            api_key="sk_test_123",
            amount_cents=None,
            idempotency_key=None,
        )

    def test_partial_refund_in_minor_units(self, stripe_gateway):
        with patch(f"{ADAPTER}.create_refund", return_value=refund_result(1500)) as create:
            PaymentService.refund("pi_test123456", amount=Decimal("15.00"))

        assert create.call_args.kwargs["amount_cents"] == 1500

    def test_provider_error_raises_refund_failed_with_message(self, stripe_gateway):
        error = StripeInvalidRequestError(
            "Charge ch_123 has already been refunded.", stripe_code="charge_already_refunded"
        )

        with patch(f"{ADAPTER}.create_refund", side_effect=error):
            with pytest.raises(RefundFailedError) as exc_info:
                PaymentService.refund("pi_test123456")

        assert exc_info.value.message == "Charge ch_123 has already been refunded."
        assert exc_info.value.status_code == 500

    def test_live_mode_uses_live_key(self):
        GatewaySettingFactory(mode=GatewayMode.LIVE, live_secret_key="sk_live_999")

        with patch(f"{ADAPTER}.create_refund", return_value=refund_result()) as create:
            PaymentService.refund("pi_test123456")

        assert create.call_args.kwargs["api_key"] == "sk_live_999"


# =============================================================================
# TestGatewaySettingService
# =============================================================================


@pytest.mark.django_db
class TestGatewaySettingService:
    def test_upsert_creates(self):
        setting = GatewaySettingService.upsert("stripe", test_secret_key="sk_test_new")

        assert setting.gateway == "stripe"
        assert setting.mode == GatewayMode.TEST
        assert setting.test_secret_key == "sk_test_new"
        assert setting.is_active is False

    def test_upsert_updates_only_supplied_fields(self, stripe_gateway):
        setting = GatewaySettingService.upsert("stripe", mode=GatewayMode.LIVE)

        assert setting.pk == stripe_gateway.pk
        assert setting.mode == GatewayMode.LIVE
        assert setting.test_secret_key == "sk_test_123"
        assert setting.is_active is True

    def test_upsert_logs_whether_row_was_created(self, caplog):
        with caplog.at_level("INFO", logger="payments.services.GatewaySettingService"):
            GatewaySettingService.upsert("stripe", test_secret_key="sk_test_new")
            GatewaySettingService.upsert("stripe", is_active=True)

        records = [r for r in caplog.records if r.getMessage() == "Gateway setting saved"]
        assert [r.was_created for r in records] == [True, False]
        assert records[1].updated_fields == ["is_active"]

    def test_list_active_excludes_inactive(self, stripe_gateway):
        GatewaySettingFactory(gateway="paypal", is_active=False)

        assert list(GatewaySettingService.list_active()) == [stripe_gateway]
        assert GatewaySettingService.list_all().count() == 2
