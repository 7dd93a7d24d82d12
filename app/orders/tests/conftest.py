"""
Fixtures for order tests.
"""

from decimal import Decimal

import pytest

from catalog.tests.factories import ProductFactory
from orders.tests.factories import OrderFactory


@pytest.fixture
def product(db):
    """Product priced 20.00 with 5 units in stock."""
    return ProductFactory(price=Decimal("20.00"), stock=5)


@pytest.fixture
def order(user, product):
    """Processing order owned by user: 2 units of product (stock left 3)."""
    return OrderFactory.with_item(product=product, quantity=2, user=user)


@pytest.fixture
def order_payload(product):
    """Factory for a valid POST /orders/ body."""

    def _payload(quantity=2, **overrides):
        items_price = product.price * quantity
        payload = {
            "items": [{"product": product.id, "quantity": quantity, "price": str(product.price)}],
            "shippingAddress": "1 Main St, Springfield",
            "paymentMethod": "Stripe",
            "itemsPrice": str(items_price),
            "taxPrice": "0.00",
            "shippingPrice": "0.00",
            "totalPrice": str(items_price),
        }
        payload.update(overrides)
        return payload

    return _payload
