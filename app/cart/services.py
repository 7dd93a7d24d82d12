"""
Cart service.

Every mutation recomputes Cart.total_price from the stored line snapshots.
Adding a product that is already in the cart accumulates its quantity and
keeps the original price snapshot.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from django.db.models import F, Sum

from cart.models import Cart, CartItem
from catalog.models import Product
from core.exceptions import NotFoundError
from core.helpers import quantize_money
from core.services import BaseService
from core.validators import validate_object_id

if TYPE_CHECKING:
    from authentication.models import User


class CartService(BaseService):
    """Cart operations for the current user."""

    @classmethod
    def get_or_create(cls, user: User) -> Cart:
        cart, _ = Cart.objects.get_or_create(user=user)
        return cart

    @classmethod
    def add_item(cls, user: User, product_id: str, quantity: int) -> Cart:
        """
        Add quantity units of a product.

        Raises:
            InvalidObjectIdError: Malformed product id
            NotFoundError: Unknown product
        """
        product_id = validate_object_id(product_id, "Invalid product ID format")
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            raise NotFoundError("Product not found", error_code="PRODUCT_NOT_FOUND")

        with cls.atomic():
            cart = cls.get_or_create(user)
            item, created = CartItem.objects.get_or_create(
                cart=cart,
                product=product,
                defaults={"quantity": quantity, "price": product.price},
            )
            if not created:
                CartItem.objects.filter(pk=item.pk).update(quantity=F("quantity") + quantity)
            cls._recalculate(cart)

        cls.get_logger().info(
            "Cart item added",
            extra={"user_id": user.id, "product_id": product_id, "quantity": quantity},
        )
        return cart

    @classmethod
    def update_item(cls, user: User, item_id: str, quantity: int) -> Cart:
        """
        Set the quantity of a cart line.

        Raises:
            NotFoundError: No cart, or the item is not in it
        """
        cart = Cart.objects.filter(user=user).first()
        if cart is None:
            raise NotFoundError("Cart not found", error_code="CART_NOT_FOUND")

        with cls.atomic():
            updated = CartItem.objects.filter(cart=cart, pk=item_id).update(quantity=quantity)
            if not updated:
                raise NotFoundError("Item not found in cart", error_code="CART_ITEM_NOT_FOUND")
            cls._recalculate(cart)
        return cart

    @classmethod
    def remove_item(cls, user: User, item_id: str) -> Cart:
        """
        Remove a cart line. Removing an item that is not there is a no-op.

        Raises:
            NotFoundError: No cart
        """
        cart = Cart.objects.filter(user=user).first()
        if cart is None:
            raise NotFoundError("Cart not found", error_code="CART_NOT_FOUND")

        with cls.atomic():
            CartItem.objects.filter(cart=cart, pk=item_id).delete()
            cls._recalculate(cart)
        return cart

    @classmethod
    def _recalculate(cls, cart: Cart) -> None:
        total = cart.items.aggregate(total=Sum(F("price") * F("quantity")))["total"]
        cart.total_price = quantize_money(total or Decimal("0.00"))
        cart.save(update_fields=["total_price", "updated_at"])
