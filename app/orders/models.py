"""
Order models.

This module defines:
- Order: A placed order, its price breakdown and lifecycle state
- OrderItem: Line item holding a name/price snapshot taken at checkout
- ShippingSetting: Shipping fee configuration used by the pricing helpers

State Flow (django-fsm):
    PROCESSING → SHIPPED → DELIVERED
    PROCESSING → CANCELLED (owner cancel)
    any non-cancelled → PROCESSING (mark_paid)
    any non-cancelled → DELIVERED (deliver)
    any non-cancelled → any status (admin set_status)

    CANCELLED is terminal.

Usage:
    order.mark_paid(payment_result={"id": "pi_123", "status": "succeeded"})
    order.save()

Related files:
    - services.py: OrderService drives every transition together with stock
    - pricing.py: tax/shipping/tracking helpers
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django_fsm import RETURN_VALUE, FSMField, transition

from core.model_mixins import ObjectIdPrimaryKeyMixin
from core.models import BaseModel


class OrderStatus(models.TextChoices):
    """
    Order lifecycle states.

    Terminal states: CANCELLED
    """

    PROCESSING = "Processing", "Processing"
    SHIPPED = "Shipped", "Shipped"
    DELIVERED = "Delivered", "Delivered"
    CANCELLED = "Cancelled", "Cancelled"


class PaymentMethod(models.TextChoices):
    STRIPE = "Stripe", "Stripe"
    COD = "COD", "Cash on delivery"


ACTIVE_STATUSES = [
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
]


class Order(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    A customer order.

    is_paid and is_delivered are flags orthogonal to status; marking paid
    moves the order to PROCESSING and marking delivered moves it to
    DELIVERED.

    Fields:
        user: Customer who placed the order
        status: Lifecycle state (FSM)
        payment_method: Stripe or COD
        payment_result: Provider reference {id, status, update_time, email_address}
        shipping_address: Free-form delivery address
        tracking_number: Carrier tracking number
        items_price / tax_price / shipping_price / total_price: Price breakdown
        is_paid / paid_at: Payment flag and timestamp
        is_delivered / delivered_at: Delivery flag and timestamp
    """

    # ==========================================================================
    # Relationships
    # ==========================================================================

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
        help_text="Customer who placed the order",
    )

    # ==========================================================================
    # State
    # ==========================================================================

    # Not protected: services call refresh_from_db() on locked rows
    status = FSMField(
        default=OrderStatus.PROCESSING,
        choices=OrderStatus.choices,
        db_index=True,
        help_text="Current order status (managed by FSM)",
    )

    # ==========================================================================
    # Payment & Shipping
    # ==========================================================================

    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        help_text="How the customer pays",
    )
    payment_result = models.JSONField(
        default=dict,
        blank=True,
        help_text="Provider payment reference (id, status, update_time, email_address)",
    )
    shipping_address = models.TextField(
        help_text="Delivery address",
    )
    tracking_number = models.CharField(
        max_length=64,
        blank=True,
        help_text="Carrier tracking number",
    )

    # ==========================================================================
    # Price Breakdown
    # ==========================================================================

    items_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Sum of item price x quantity",
    )
    tax_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Tax charged",
    )
    shipping_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Shipping charged",
    )
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="items + tax + shipping",
    )

    # ==========================================================================
    # Flags & Timestamps
    # ==========================================================================

    is_paid = models.BooleanField(
        default=False,
        help_text="Whether payment has been received",
    )
    paid_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When payment was received",
    )
    is_delivered = models.BooleanField(
        default=False,
        help_text="Whether the order was delivered",
    )
    delivered_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the order was delivered",
    )

    # ==========================================================================
    # Meta & Methods
    # ==========================================================================

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "order"
        verbose_name_plural = "orders"
        indexes = [
            models.Index(fields=["user", "-created_at"]),
            models.Index(fields=["status", "-created_at"]),
        ]

    def __str__(self) -> str:
        return f"Order({self.id}, {self.status}, {self.total_price})"

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================

    @transition(field=status, source=ACTIVE_STATUSES, target=OrderStatus.PROCESSING)
    def mark_paid(self, payment_result: dict | None = None):
        """
        Record payment.

        Transition: any non-cancelled → PROCESSING

        Re-applying sets the same flags again.
        """
        self.is_paid = True
        self.paid_at = timezone.now()
        if payment_result is not None:
            self.payment_result = payment_result

    @transition(field=status, source=OrderStatus.PROCESSING, target=OrderStatus.CANCELLED)
    def cancel(self):
        """
        Cancel the order.

        Transition: PROCESSING → CANCELLED

        Stock restoration is done by OrderService in the same transaction.
        """

    @transition(field=status, source=ACTIVE_STATUSES, target=OrderStatus.DELIVERED)
    def deliver(self):
        """
        Mark the order delivered.

        Transition: any non-cancelled → DELIVERED
        """
        self.is_delivered = True
        self.delivered_at = timezone.now()

    @transition(
        field=status,
        source=ACTIVE_STATUSES,
        target=RETURN_VALUE(*OrderStatus.values),
    )
    def set_status(self, new_status: str, tracking_number: str | None = None) -> str:
        """
        Admin status overwrite.

        Transition: any non-cancelled → new_status
        """
        if tracking_number:
            self.tracking_number = tracking_number
        return new_status


class OrderItem(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    Order line item.

    Name and price are copied from the product at checkout so later
    product edits or deletion never change what the customer bought.

    Fields:
        order: Owning order
        product: Source product (null once the product is deleted)
        name: Product name snapshot
        quantity: Units ordered (>= 1)
        price: Unit price snapshot
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
        help_text="Owning order",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
        help_text="Source product (null if since deleted)",
    )
    name = models.CharField(
        max_length=100,
        help_text="Product name at checkout",
    )
    quantity = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Units ordered",
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Unit price at checkout",
    )

    class Meta:
        ordering = ["created_at"]
        verbose_name = "order item"
        verbose_name_plural = "order items"

    def __str__(self) -> str:
        return f"{self.quantity} x {self.name}"


class ShippingSetting(BaseModel):
    """
    Shipping fee configuration.

    The active row is read by orders.pricing.calculate_shipping_price and
    exposed on GET /api/v1/shipping/.

    Fields:
        shipping_fee: Flat fee charged below the threshold
        free_shipping_threshold: Items total above which shipping is free
        is_active: Whether this row is the one in effect
    """

    DEFAULT_FEE = Decimal("15.00")
    DEFAULT_THRESHOLD = Decimal("100.00")

    shipping_fee = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=DEFAULT_FEE,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Flat shipping fee",
    )
    free_shipping_threshold = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=DEFAULT_THRESHOLD,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Items total above which shipping is free",
    )
    is_active = models.BooleanField(
        default=True,
        db_index=True,
        help_text="Whether this configuration is in effect",
    )

    class Meta:
        ordering = ["-updated_at"]
        verbose_name = "shipping setting"
        verbose_name_plural = "shipping settings"

    def __str__(self) -> str:
        return f"Shipping({self.shipping_fee}, free over {self.free_shipping_threshold})"

    @classmethod
    def get_active(cls) -> ShippingSetting:
        """Return the active configuration, creating the default row if none exists."""
        setting = cls.objects.filter(is_active=True).first()
        if setting is None:
            setting = cls.objects.create(
                shipping_fee=cls.DEFAULT_FEE,
                free_shipping_threshold=cls.DEFAULT_THRESHOLD,
                is_active=True,
            )
        return setting
