"""
Pytest fixtures for payment tests.

Sections:
    - Mock Stripe Objects
    - Payment Fixtures
    - Webhook Fixtures
"""

from dataclasses import dataclass
from typing import Any

import pytest

from orders.tests.factories import OrderFactory
from payments.tests.factories import PaymentFactory

# =============================================================================
# Mock Stripe Objects
# =============================================================================


@dataclass
class MockStripeObject:
    """Mock Stripe API object with attribute access and to_dict support."""

    data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        if name == "data":
            return self.__dict__["data"]
        return self.data.get(name)

    def to_dict(self) -> dict[str, Any]:
        return self.data


@pytest.fixture
def mock_payment_intent():
    """Create a mock PaymentIntent response."""

    def _create(
        id: str = "pi_test123456",
        status: str = "requires_payment_method",
        amount: int = 11000,
        currency: str = "usd",
        client_secret: str = "pi_test123456_secret_abc123",
        metadata: dict | None = None,
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "payment_intent",
                "status": status,
                "amount": amount,
                "currency": currency,
                "client_secret": client_secret,
                "metadata": metadata or {},
            }
        )

    return _create


@pytest.fixture
def mock_refund():
    """Create a mock Refund response."""

    def _create(
        id: str = "re_test123456",
        amount: int = 11000,
        currency: str = "usd",
        status: str = "succeeded",
        payment_intent: str = "pi_test123456",
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "refund",
                "amount": amount,
                "currency": currency,
                "status": status,
                "payment_intent": payment_intent,
            }
        )

    return _create


# =============================================================================
# Payment Fixtures
# =============================================================================


@pytest.fixture
def order(user):
    """Unpaid Processing order owned by user (total 110.00)."""
    return OrderFactory(user=user)


@pytest.fixture
def payment(order):
    """Pending payment for order."""
    return PaymentFactory(order=order, user=order.user, payment_intent_id="pi_test123456")


# =============================================================================
# Webhook Fixtures
# =============================================================================


@pytest.fixture
def stripe_event():
    """Build a verified Stripe event dict for a PaymentIntent."""

    def _create(
        event_type: str = "payment_intent.succeeded",
        payment_intent_id: str = "pi_test123456",
        event_id: str = "evt_test123456",
        **object_fields,
    ) -> dict:
        return {
            "id": event_id,
            "object": "event",
            "type": event_type,
            "data": {
                "object": {
                    "id": payment_intent_id,
                    "object": "payment_intent",
                    **object_fields,
                }
            },
        }

    return _create
