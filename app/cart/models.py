"""
Cart models.

This module defines:
- Cart: A user's cart (exactly one per user)
- CartItem: A product line whose price is captured when first added

Related files:
    - services.py: CartService, the only writer of total_price
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from core.model_mixins import ObjectIdPrimaryKeyMixin
from core.models import BaseModel


class Cart(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    Shopping cart.

    Fields:
        user: Owner (one cart per user)
        total_price: Sum of price x quantity over items
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart",
        help_text="Cart owner",
    )
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Sum of item price x quantity",
    )

    class Meta:
        verbose_name = "cart"
        verbose_name_plural = "carts"

    def __str__(self) -> str:
        return f"Cart({self.user_id})"


class CartItem(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    Cart line.

    Fields:
        cart: Owning cart
        product: Product in the cart
        quantity: Units (>= 1)
        price: Unit price snapshot taken when the line was created
    """

    cart = models.ForeignKey(
        Cart,
        on_delete=models.CASCADE,
        related_name="items",
        help_text="Owning cart",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.CASCADE,
        related_name="cart_items",
        help_text="Product in the cart",
    )
    quantity = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Number of units",
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Unit price when added",
    )

    class Meta:
        verbose_name = "cart item"
        verbose_name_plural = "cart items"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "product"],
                name="unique_cart_product",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.quantity} x {self.product_id}"
