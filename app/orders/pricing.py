"""
Checkout pricing helpers.

Usage:
    from orders.pricing import calculate_tax, calculate_shipping_price

    tax = calculate_tax(Decimal("40.00"))          # Decimal("4.00")
    shipping = calculate_shipping_price(Decimal("120.00"))  # Decimal("0.00")
"""

from __future__ import annotations

import secrets
import time
from decimal import Decimal

from django.conf import settings

from core.helpers import quantize_money
from orders.models import ShippingSetting


def calculate_tax(items_price: Decimal) -> Decimal:
    """Tax at settings.TAX_RATE, rounded to cents."""
    return quantize_money(Decimal(items_price) * settings.TAX_RATE)


def calculate_shipping_price(items_price: Decimal) -> Decimal:
    """
    Shipping for an items total, using the active ShippingSetting.

    Free when the items total is strictly above the threshold.
    """
    shipping = ShippingSetting.get_active()
    if Decimal(items_price) > shipping.free_shipping_threshold:
        return Decimal("0.00")
    return quantize_money(shipping.shipping_fee)


def generate_tracking_number() -> str:
    """TRK + millisecond timestamp + random 0-999."""
    return f"TRK{int(time.time() * 1000)}{secrets.randbelow(1000)}"
