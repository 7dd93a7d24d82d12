"""
Return request models.

This module defines:
- ReturnRequest: A customer's request to return (part of) a delivered order
- ReturnItem: Returned product/quantity with the order's price snapshot

State Flow (django-fsm):
    PROCESSING → APPROVED → RETURNED → REFUNDED
    PROCESSING → REJECTED

    Admins may set any status; side effects (stock restore, Stripe refund)
    are driven by ReturnService.

Usage:
    return_request.set_status(ReturnStatus.APPROVED)
    return_request.save()
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django_fsm import RETURN_VALUE, FSMField, transition

from core.model_mixins import ObjectIdPrimaryKeyMixin
from core.models import BaseModel


class ReturnStatus(models.TextChoices):
    PROCESSING = "Processing", "Processing"
    APPROVED = "Approved", "Approved"
    RETURNED = "Returned", "Returned"
    REFUNDED = "Refunded", "Refunded"
    REJECTED = "Rejected", "Rejected"


class ReturnRequest(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    A return request for an order.

    Fields:
        user: Customer who filed the return
        order: Order being returned
        reason: Customer's reason
        total_refund_amount: Sum of item snapshot price x returned quantity
            (the order total for full returns)
        status: Workflow state (FSM)
        admin_notes: Admin notes, including automated refund notes
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="return_requests",
        help_text="Customer who filed the return",
    )
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="return_requests",
        help_text="Order being returned",
    )
    reason = models.TextField(
        help_text="Reason for the return",
    )
    total_refund_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Amount to refund",
    )

    # Not protected: update_status re-reads the locked row
    status = FSMField(
        default=ReturnStatus.PROCESSING,
        choices=ReturnStatus.choices,
        db_index=True,
        help_text="Current return status (managed by FSM)",
    )
    admin_notes = models.TextField(
        blank=True,
        default="",
        help_text="Admin notes",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "return request"
        verbose_name_plural = "return requests"
        indexes = [
            models.Index(fields=["user", "-created_at"]),
        ]

    def __str__(self) -> str:
        return f"Return {self.id} for order {self.order_id} ({self.status})"

    @transition(field=status, source="*", target=RETURN_VALUE(*ReturnStatus.values))
    def set_status(self, new_status: str) -> str:
        return new_status


class ReturnItem(BaseModel):
    """One returned line, priced from the order item snapshot."""

    return_request = models.ForeignKey(
        ReturnRequest,
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="return_items",
        help_text="Returned product (null if since deleted)",
    )
    name = models.CharField(
        max_length=100,
        help_text="Product name at checkout",
    )
    quantity = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Units returned",
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Unit price at checkout",
    )

    class Meta:
        ordering = ["created_at"]
        verbose_name = "return item"
        verbose_name_plural = "return items"

    def __str__(self) -> str:
        return f"{self.quantity} x {self.name}"
