"""
Return workflow service.

ReturnService validates return requests against the order and drives the
admin status workflow:

    create_return   Delivered order, owner/admin, within the return window
    update_status   Approved restores stock; Refunded issues a Stripe refund

Usage:
    from returns.services import ReturnLine, ReturnService

    return_request = ReturnService.create_return(
        user,
        order_id,
        reason="Wrong size",
        items=[ReturnLine(product_id=product.id, quantity=1)],
    )

    ReturnService.update_status(return_request.id, "Approved", admin_notes="Received")
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from django.conf import settings
from django.db.models import QuerySet
from django.utils import timezone

from catalog.services import StockLedger
from core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from core.services import BaseService
from core.validators import validate_object_id
from orders.models import Order, OrderStatus, PaymentMethod
from orders.services import OrderService
from payments.adapters import IdempotencyKeyGenerator
from payments.exceptions import RefundFailedError
from payments.services import PaymentService
from returns.exceptions import RefundProcessingFailedError, ReturnNotAllowedError
from returns.models import ReturnItem, ReturnRequest, ReturnStatus

if TYPE_CHECKING:
    from authentication.models import User

# Stripe messages that mean the money has already gone back to the customer
ALREADY_REFUNDED_MARKERS = ("already been refunded", "greater than unrefunded amount")

STRIPE_REFUND_NOTE = " | Integrated Stripe Refund processed: {refund_id}"
STRIPE_REFUND_PREFIX = "Stripe Refund processed."
ALREADY_REFUNDED_NOTE = " | Refund verified/already partially processed in Stripe."
ALREADY_REFUNDED_PREFIX = "Refund verified in Stripe."


@dataclass
class ReturnLine:
    """A requested return: product id and units."""

    product_id: str
    quantity: int


class ReturnService(BaseService):
    """Return requests and their admin workflow."""

    # ==========================================================================
    # Lookups
    # ==========================================================================

    @classmethod
    def get_return(cls, return_id: str) -> ReturnRequest:
        return_id = validate_object_id(return_id, "Invalid return ID format")
        try:
            return ReturnRequest.objects.get(pk=return_id)
        except ReturnRequest.DoesNotExist:
            raise NotFoundError("Return request not found", error_code="RETURN_NOT_FOUND")

    @classmethod
    def list_for_user(cls, user: User) -> QuerySet[ReturnRequest]:
        return (
            ReturnRequest.objects.filter(user=user)
            .select_related("order")
            .prefetch_related("items")
        )

    @classmethod
    def list_all(cls) -> QuerySet[ReturnRequest]:
        return ReturnRequest.objects.select_related("user", "order").prefetch_related("items")

    # ==========================================================================
    # Create
    # ==========================================================================

    @classmethod
    def create_return(
        cls,
        actor: User,
        order_id: str,
        reason: str,
        items: list[ReturnLine] | None = None,
    ) -> ReturnRequest:
        """
        File a return request for a delivered order.

        Without items the whole order is returned for its total price.

        Raises:
            InvalidObjectIdError: Malformed order id
            NotFoundError: Order does not exist
            PermissionDeniedError: Actor is neither owner nor admin
            ReturnNotAllowedError: Not delivered, window expired, or an item
                is not in the order / exceeds the ordered quantity
        """
        order = OrderService.get_order(order_id)

        if order.user_id != actor.pk and not actor.is_admin:
            raise PermissionDeniedError(
                "Unauthorized to return this order", error_code="NOT_ORDER_OWNER"
            )

        if order.status != OrderStatus.DELIVERED:
            raise ReturnNotAllowedError("Only delivered orders can be returned")

        cls._check_return_window(order)

        lines, total_refund_amount = cls._resolve_lines(order, items or [])

        with cls.atomic():
            return_request = ReturnRequest.objects.create(
                user=actor,
                order=order,
                reason=reason,
                total_refund_amount=total_refund_amount,
            )
            ReturnItem.objects.bulk_create(
                [
                    ReturnItem(
                        return_request=return_request,
                        product_id=order_item.product_id,
                        name=order_item.name,
                        quantity=quantity,
                        price=order_item.price,
                    )
                    for order_item, quantity in lines
                ]
            )

        cls.get_logger().info(
            "Return request created",
            extra={
                "return_id": return_request.id,
                "order_id": order.id,
                "user_id": actor.pk,
                "total_refund_amount": str(total_refund_amount),
                "full_return": not items,
            },
        )
        return return_request

    @classmethod
    def _check_return_window(cls, order: Order) -> None:
        window_hours = settings.RETURN_WINDOW_HOURS
        delivered_at = order.delivered_at or order.updated_at
        if abs(timezone.now() - delivered_at) > timedelta(hours=window_hours):
            raise ReturnNotAllowedError(
                f"Return period ({window_hours} hours) has expired",
                error_code="RETURN_WINDOW_EXPIRED",
            )

    @classmethod
    def _resolve_lines(cls, order: Order, items: list[ReturnLine]) -> tuple[list, Decimal]:
        """Match requested lines to order items; returns (lines, refund amount)."""
        order_items = list(order.items.all())

        if not items:
            return [(oi, oi.quantity) for oi in order_items], order.total_price

        # Repeated lines for one product count against the same ordered quantity
        requested: dict[str, int] = {}
        labels: dict[str, str] = {}
        for item in items:
            key = str(item.product_id).lower()
            requested[key] = requested.get(key, 0) + item.quantity
            labels.setdefault(key, item.product_id)

        by_product = {oi.product_id: oi for oi in order_items if oi.product_id}
        lines = []
        total = Decimal("0.00")
        for key, quantity in requested.items():
            order_item = by_product.get(key)
            if order_item is None:
                raise ReturnNotAllowedError(f"Item {labels[key]} not found in order")
            if quantity > order_item.quantity:
                raise ReturnNotAllowedError(f"Quantity for {labels[key]} exceeds order quantity")
            lines.append((order_item, quantity))
            total += order_item.price * quantity

        return lines, total

    # ==========================================================================
    # Status Workflow
    # ==========================================================================

    @classmethod
    def update_status(
        cls,
        return_id: str,
        new_status: str,
        admin_notes: str | None = None,
    ) -> ReturnRequest:
        """
        Move a return to new_status (admin).

        The return row is locked for the whole update so concurrent
        approvals cannot restore stock twice.

        Raises:
            NotFoundError: Return does not exist
            ValidationError: Unknown status
            RefundProcessingFailedError: Stripe refund failed (status unchanged)
        """
        if new_status not in ReturnStatus.values:
            raise ValidationError(f"Invalid return status: {new_status}")

        return_id = cls.get_return(return_id).pk
        notes = admin_notes or ""

        with cls.atomic():
            return_request = (
                ReturnRequest.objects.select_for_update()
                .select_related("order")
                .get(pk=return_id)
            )
            previous_status = return_request.status

            if new_status == ReturnStatus.APPROVED and previous_status != ReturnStatus.APPROVED:
                for item in return_request.items.all():
                    StockLedger.release(item.product_id, item.quantity)

            if new_status == ReturnStatus.REFUNDED and previous_status != ReturnStatus.REFUNDED:
                notes = cls._refund(return_request, notes)

            return_request.set_status(new_status)
            if notes:
                return_request.admin_notes = notes
            return_request.save()

        cls.get_logger().info(
            "Return status updated",
            extra={
                "return_id": return_request.id,
                "from_status": previous_status,
                "to_status": new_status,
            },
        )
        return return_request

    @classmethod
    def _refund(cls, return_request: ReturnRequest, notes: str) -> str:
        """
        Refund a Stripe-paid order and return the updated admin notes.

        Orders not paid through Stripe are left to manual handling.
        """
        order = return_request.order
        payment_intent_id = (order.payment_result or {}).get("id")
        if order.payment_method != PaymentMethod.STRIPE or not payment_intent_id:
            return notes

        amount = return_request.total_refund_amount or order.total_price

        try:
            refund = PaymentService.refund(
                payment_intent_id,
                amount=amount,
                idempotency_key=IdempotencyKeyGenerator.generate("return_refund", return_request.id),
            )
        except RefundFailedError as e:
            if any(marker in e.message for marker in ALREADY_REFUNDED_MARKERS):
                cls.get_logger().info(
                    "Refund already processed in Stripe, continuing",
                    extra={"return_id": return_request.id, "payment_intent_id": payment_intent_id},
                )
                return (notes or ALREADY_REFUNDED_PREFIX) + ALREADY_REFUNDED_NOTE

            cls.get_logger().error(
                "Automated refund failed",
                extra={
                    "return_id": return_request.id,
                    "payment_intent_id": payment_intent_id,
                    "error": e.message,
                },
            )
            raise RefundProcessingFailedError(
                f"Stripe automated refund failed: {e.message}",
                details={"return_id": return_request.id},
            ) from e

        return (notes or STRIPE_REFUND_PREFIX) + STRIPE_REFUND_NOTE.format(refund_id=refund.id)
