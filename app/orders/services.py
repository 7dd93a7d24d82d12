"""
Order service: the order lifecycle.

OrderService owns every order status change and keeps stock consistent
with it:

    create_order   reserve stock for each line, snapshot prices, create order
    mark_paid      is_paid/paid_at/payment_result, status → Processing
    cancel_order   restore stock, status → Cancelled (owner only)
    update_status  admin overwrite, tracking number, shipping notification
    mark_delivered is_delivered/delivered_at, status → Delivered

Stock changes and the status change they belong to commit together in one
transaction. Notifications are sent after commit and never fail the caller.

Usage:
    from orders.services import OrderService, OrderLine, PriceBreakdown

    order = OrderService.create_order(
        user=request.user,
        items=[OrderLine(product_id="665...", quantity=2)],
        shipping_address="1 Main St",
        payment_method="Stripe",
        price_breakdown=PriceBreakdown(items_price=Decimal("40.00")),
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from django_fsm import TransitionNotAllowed

from catalog.services import StockLedger
from core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from core.helpers import quantize_money
from core.services import BaseService
from core.validators import validate_object_id
from orders.exceptions import InvalidStateTransitionError
from orders.models import Order, OrderItem, OrderStatus
from orders.pricing import (
    calculate_shipping_price,
    calculate_tax,
    generate_tracking_number,
)
from toolkit.services.notifications import Notifier

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from authentication.models import User


# Allowed rounding drift between client-computed and server-computed prices
PRICE_TOLERANCE = Decimal("0.01")


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class OrderLine:
    """One requested line: product id and quantity."""

    product_id: str
    quantity: int


@dataclass
class PriceBreakdown:
    """
    Client-supplied price breakdown.

    items_price is checked against the server-side price snapshot and
    total_price against the sum of the parts. Missing tax/shipping/total
    are computed with the pricing helpers.
    """

    items_price: Decimal
    tax_price: Decimal | None = None
    shipping_price: Decimal | None = None
    total_price: Decimal | None = None


# =============================================================================
# Order Service
# =============================================================================


class OrderService(BaseService):
    """Order lifecycle operations."""

    # ==========================================================================
    # Lookups
    # ==========================================================================

    @classmethod
    def get_order(cls, order_id: str, invalid_message: str = "Invalid order ID format") -> Order:
        """
        Load an order by id.

        Raises:
            InvalidObjectIdError: Malformed id (400)
            NotFoundError: Unknown order (404)
        """
        order_id = validate_object_id(order_id, invalid_message)
        order = (
            Order.objects.select_related("user")
            .prefetch_related("items")
            .filter(pk=order_id)
            .first()
        )
        if order is None:
            raise NotFoundError("Order not found", error_code="ORDER_NOT_FOUND")
        return order

    @classmethod
    def get_for_actor(cls, order_id: str, actor: User) -> Order:
        """
        Load an order the actor may see (owner or admin).

        Raises:
            PermissionDeniedError: Non-admin actor does not own the order
        """
        order = cls.get_order(order_id)
        cls._check_owner_or_admin(order, actor)
        return order

    @classmethod
    def list_for_user(cls, user: User) -> QuerySet[Order]:
        return Order.objects.filter(user=user).prefetch_related("items").order_by("-created_at")

    @classmethod
    def list_all(cls) -> QuerySet[Order]:
        return Order.objects.select_related("user").prefetch_related("items").order_by("-created_at")

    # ==========================================================================
    # Create
    # ==========================================================================

    @classmethod
    def create_order(
        cls,
        user: User,
        items: list[OrderLine],
        shipping_address: str,
        payment_method: str,
        price_breakdown: PriceBreakdown,
    ) -> Order:
        """
        Place an order.

        Reserves stock for every line, snapshots product name and price,
        validates the price breakdown and creates the order, all in one
        transaction. Any failure rolls every stock decrement back.

        Raises:
            ValidationError: No items, or prices do not add up
            NotFoundError: A product does not exist
            InsufficientStockError: A product is short on stock
        """
        if not items:
            raise ValidationError("No order items", error_code="NO_ORDER_ITEMS")

        logger = cls.get_logger()

        with cls.atomic():
            snapshots = []
            for line in items:
                product = StockLedger.reserve(line.product_id, line.quantity)
                snapshots.append((product, line.quantity))

            items_price = quantize_money(
                sum((product.price * quantity for product, quantity in snapshots), Decimal("0"))
            )
            breakdown = cls._resolve_breakdown(items_price, price_breakdown)

            order = Order.objects.create(
                user=user,
                shipping_address=shipping_address,
                payment_method=payment_method,
                **breakdown,
            )
            OrderItem.objects.bulk_create(
                [
                    OrderItem(
                        order=order,
                        product=product,
                        name=product.name,
                        quantity=quantity,
                        price=product.price,
                    )
                    for product, quantity in snapshots
                ]
            )

            cls.on_commit(lambda: Notifier.order_confirmation(order))

        logger.info(
            "Order created",
            extra={
                "order_id": order.id,
                "user_id": user.id,
                "total_price": str(order.total_price),
                "item_count": len(snapshots),
            },
        )
        return order

    @classmethod
    def _resolve_breakdown(cls, items_price: Decimal, requested: PriceBreakdown) -> dict:
        if abs(Decimal(requested.items_price) - items_price) > PRICE_TOLERANCE:
            raise ValidationError(
                "Items price does not match order items",
                error_code="ITEMS_PRICE_MISMATCH",
                details={"expected": str(items_price), "received": str(requested.items_price)},
            )

        tax_price = (
            quantize_money(requested.tax_price)
            if requested.tax_price is not None
            else calculate_tax(items_price)
        )
        shipping_price = (
            quantize_money(requested.shipping_price)
            if requested.shipping_price is not None
            else calculate_shipping_price(items_price)
        )
        total_price = items_price + tax_price + shipping_price

        if requested.total_price is not None and (
            abs(Decimal(requested.total_price) - total_price) > PRICE_TOLERANCE
        ):
            raise ValidationError(
                "Total price does not match price breakdown",
                error_code="TOTAL_PRICE_MISMATCH",
                details={"expected": str(total_price), "received": str(requested.total_price)},
            )

        return {
            "items_price": items_price,
            "tax_price": tax_price,
            "shipping_price": shipping_price,
            "total_price": total_price,
        }

    # ==========================================================================
    # Transitions
    # ==========================================================================

    @classmethod
    def mark_paid(cls, order: Order, actor: User | None, payment_result: dict | None = None) -> Order:
        """
        Mark an order paid.

        actor is None for provider-initiated calls (webhooks).

        Raises:
            PermissionDeniedError: Actor is neither owner nor admin
            InvalidStateTransitionError: Order is cancelled
        """
        if actor is not None:
            cls._check_owner_or_admin(order, actor)

        with cls.atomic():
            order = Order.objects.select_for_update().get(pk=order.pk)
            cls._transition(order, order.mark_paid, payment_result=payment_result)
            order.save()

        cls.get_logger().info(
            "Order marked paid",
            extra={"order_id": order.id, "payment_id": order.payment_result.get("id")},
        )
        return order

    @classmethod
    def cancel_order(cls, order: Order, actor: User) -> Order:
        """
        Cancel an order and restore stock.

        Only the owner may cancel; admins included are refused.

        Raises:
            PermissionDeniedError: Actor is not the owner
            InvalidStateTransitionError: Order is shipped, delivered or cancelled
        """
        if order.user_id != actor.pk:
            raise PermissionDeniedError("Access forbidden", error_code="NOT_ORDER_OWNER")

        with cls.atomic():
            order = Order.objects.select_for_update().get(pk=order.pk)
            cls._ensure_cancellable(order)

            for item in order.items.all():
                StockLedger.release(item.product_id, item.quantity)

            cls._transition(order, order.cancel)
            order.save()

        cls.get_logger().info(
            "Order cancelled",
            extra={"order_id": order.id, "user_id": actor.pk},
        )
        return order

    @classmethod
    def update_status(
        cls,
        order: Order,
        new_status: str,
        tracking_number: str | None = None,
    ) -> Order:
        """
        Admin status overwrite.

        Shipping without a tracking number generates one. Moving to
        Cancelled restores stock like an owner cancel. A shipping
        notification is sent after commit when the new status is Shipped.

        Raises:
            ValidationError: Unknown status
            InvalidStateTransitionError: Order is cancelled
        """
        if new_status not in OrderStatus.values:
            raise ValidationError(f"Invalid order status: {new_status}", error_code="INVALID_STATUS")

        with cls.atomic():
            order = Order.objects.select_for_update().get(pk=order.pk)

            if new_status == OrderStatus.CANCELLED and not order.is_cancelled:
                for item in order.items.all():
                    StockLedger.release(item.product_id, item.quantity)

            cls._transition(order, order.set_status, new_status, tracking_number=tracking_number)
            if new_status == OrderStatus.SHIPPED and not order.tracking_number:
                order.tracking_number = generate_tracking_number()
            order.save()

            if new_status == OrderStatus.SHIPPED:
                cls.on_commit(lambda: Notifier.shipping_update(order))

        cls.get_logger().info(
            "Order status updated",
            extra={
                "order_id": order.id,
                "status": order.status,
                "tracking_number": order.tracking_number,
            },
        )
        return order

    @classmethod
    def mark_delivered(cls, order: Order) -> Order:
        """
        Admin: mark an order delivered.

        Raises:
            InvalidStateTransitionError: Order is cancelled
        """
        with cls.atomic():
            order = Order.objects.select_for_update().get(pk=order.pk)
            cls._transition(order, order.deliver)
            order.save()

        cls.get_logger().info("Order delivered", extra={"order_id": order.id})
        return order

    # ==========================================================================
    # Public tracking
    # ==========================================================================

    @classmethod
    def track(cls, order_id: str | None) -> Order:
        """
        Public order lookup by id.

        Raises:
            ValidationError: Missing or malformed id
            NotFoundError: Unknown order
        """
        if not order_id:
            raise ValidationError("Please provide order ID", error_code="ORDER_ID_REQUIRED")
        return cls.get_order(
            order_id,
            invalid_message="Invalid order ID format. Please provide the full 24-character Order ID.",
        )

    # ==========================================================================
    # Internals
    # ==========================================================================

    @classmethod
    def _check_owner_or_admin(cls, order: Order, actor: User) -> None:
        if order.user_id != actor.pk and not actor.is_admin:
            raise PermissionDeniedError("Access forbidden", error_code="NOT_ORDER_OWNER")

    @classmethod
    def _ensure_cancellable(cls, order: Order) -> None:
        if order.status in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            raise InvalidStateTransitionError("Cannot cancel shipped or delivered orders")
        if order.is_cancelled:
            raise InvalidStateTransitionError("Order is already cancelled")

    @classmethod
    def _transition(cls, order: Order, method, *args, **kwargs) -> None:
        try:
            method(*args, **kwargs)
        except TransitionNotAllowed as e:
            raise InvalidStateTransitionError(
                f"Cannot change order status from {order.status}",
                details={"order_id": order.id, "status": order.status},
            ) from e
