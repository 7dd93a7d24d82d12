"""
End-to-end journeys through the HTTP API.

Stripe is patched at the adapter boundary; everything else (orders, stock,
webhook recording, returns) runs for real against the test database.
"""

from unittest.mock import patch

import pytest
from rest_framework import status

from orders.models import Order, OrderStatus
from payments.adapters import PaymentIntentResult, RefundResult
from payments.models import Payment
from returns.models import ReturnStatus

ADAPTER = "payments.services.StripeAdapter"
SIGNATURE = "t=1614556800,v1=abc123"


def succeeded_event(payment_intent_id, event_id="evt_e2e_1"):
    return {
        "id": event_id,
        "object": "event",
        "type": "payment_intent.succeeded",
        "data": {
            "object": {
                "id": payment_intent_id,
                "object": "payment_intent",
                "status": "succeeded",
                "receipt_email": "buyer@example.com",
            }
        },
    }


def deliver_webhook(client, event):
    with patch(f"{ADAPTER}.verify_webhook_signature", return_value=event):
        return client.post(
            "/api/v1/payment/webhook/",
            data=b"{}",
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE=SIGNATURE,
        )


def create_intent(client, order_id, amount, payment_intent_id="pi_e2e_123"):
    result = PaymentIntentResult(
        id=payment_intent_id,
        status="requires_payment_method",
        amount_cents=int(amount * 100),
        currency="usd",
        client_secret=f"{payment_intent_id}_secret",
    )
    with patch(f"{ADAPTER}.create_payment_intent", return_value=result):
        return client.post(
            "/api/v1/payment/create-intent/",
            {"orderId": order_id, "amount": str(amount)},
            format="json",
        )


@pytest.mark.django_db
class TestPurchaseAndReturnJourney:
    def test_checkout_pay_deliver_return_refund(
        self, authenticated_client, admin_client, api_client, stripe_gateway, product, order_payload
    ):
        # Checkout reserves stock
        response = authenticated_client.post("/api/v1/orders/", order_payload(quantity=2), format="json")
        assert response.status_code == status.HTTP_201_CREATED
        order_id = response.data["data"]["order"]["id"]
        product.refresh_from_db()
        assert product.stock == 3

        # Card payment through Stripe
        response = create_intent(authenticated_client, order_id, 40)
        assert response.status_code == status.HTTP_200_OK
        assert Payment.objects.get(payment_intent_id="pi_e2e_123").order_id == order_id

        response = deliver_webhook(api_client, succeeded_event("pi_e2e_123"))
        assert response.status_code == status.HTTP_200_OK
        order = Order.objects.get(pk=order_id)
        assert order.is_paid
        assert order.payment_result["id"] == "pi_e2e_123"

        # Redelivery is a no-op
        response = deliver_webhook(api_client, succeeded_event("pi_e2e_123"))
        assert response.status_code == status.HTTP_200_OK
        product.refresh_from_db()
        assert product.stock == 3

        # Fulfilment
        response = admin_client.put(f"/api/v1/orders/{order_id}/deliver/")
        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["order"]["status"] == OrderStatus.DELIVERED

        # Partial return of one unit
        response = authenticated_client.post(
            "/api/v1/returns/",
            {"orderId": order_id, "reason": "Too big", "items": [{"product": product.id, "quantity": 1}]},
            format="json",
        )
        assert response.status_code == status.HTTP_201_CREATED
        return_id = response.data["data"]["returnRequest"]["id"]

        response = admin_client.put(
            f"/api/v1/returns/{return_id}/status/", {"status": ReturnStatus.APPROVED}, format="json"
        )
        assert response.status_code == status.HTTP_200_OK
        product.refresh_from_db()
        assert product.stock == 4

        refund = RefundResult(
            id="re_e2e_1",
            amount_cents=2000,
            currency="usd",
            status="succeeded",
            payment_intent_id="pi_e2e_123",
        )
        with patch(f"{ADAPTER}.create_refund", return_value=refund) as create_refund:
            response = admin_client.put(
                f"/api/v1/returns/{return_id}/status/", {"status": ReturnStatus.REFUNDED}, format="json"
            )

        assert response.status_code == status.HTTP_200_OK
        assert create_refund.call_args.args[0] == "pi_e2e_123"
        assert create_refund.call_args.kwargs["amount_cents"] == 2000
        body = response.data["data"]["returnRequest"]
        assert body["status"] == ReturnStatus.REFUNDED
        assert body["admin_notes"].endswith("re_e2e_1")


@pytest.mark.django_db
class TestCancelledOrderJourney:
    def test_late_payment_does_not_revive_cancelled_order(
        self, authenticated_client, api_client, stripe_gateway, product, order_payload
    ):
        response = authenticated_client.post("/api/v1/orders/", order_payload(quantity=2), format="json")
        order_id = response.data["data"]["order"]["id"]
        create_intent(authenticated_client, order_id, 40, payment_intent_id="pi_e2e_late")

        response = authenticated_client.put(f"/api/v1/orders/{order_id}/cancel/")
        assert response.status_code == status.HTTP_200_OK
        product.refresh_from_db()
        assert product.stock == 5

        response = deliver_webhook(api_client, succeeded_event("pi_e2e_late", event_id="evt_e2e_late"))

        assert response.status_code == status.HTTP_200_OK
        order = Order.objects.get(pk=order_id)
        assert order.status == OrderStatus.CANCELLED
        assert not order.is_paid
        product.refresh_from_db()
        assert product.stock == 5
