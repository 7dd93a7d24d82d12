"""
Fixtures for return tests.
"""

from decimal import Decimal

import pytest

from catalog.tests.factories import ProductFactory
from orders.tests.factories import OrderFactory, OrderItemFactory


@pytest.fixture
def shirt(db):
    """Product priced 25.00, 10 in stock."""
    return ProductFactory(price=Decimal("25.00"), stock=10)


@pytest.fixture
def mug(db):
    """Product priced 8.50, 10 in stock."""
    return ProductFactory(price=Decimal("8.50"), stock=10)


@pytest.fixture
def delivered_order(user, shirt, mug):
    """
    Delivered, Stripe-paid order owned by user.

    Lines: 2 x shirt @ 25.00, 3 x mug @ 8.50; total 75.50.
    """
    order = OrderFactory(
        user=user,
        delivered=True,
        paid=True,
        items_price=Decimal("75.50"),
        tax_price=Decimal("0.00"),
        shipping_price=Decimal("0.00"),
        total_price=Decimal("75.50"),
    )
    OrderItemFactory(order=order, product=shirt, quantity=2)
    OrderItemFactory(order=order, product=mug, quantity=3)
    return order
