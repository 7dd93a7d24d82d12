"""
Best-effort customer notifications.

Notifier builds the email context for an order or account event and hands
it to EmailService. A notification failure is logged and reported as
False; it never propagates to the operation that triggered it.

Callers schedule notifications with transaction.on_commit (see
core.services.BaseService.on_commit) so nothing is sent for a rolled-back
change.

Usage:
    from toolkit.services.notifications import Notifier

    Notifier.order_confirmation(order)
    Notifier.shipping_update(order)
    Notifier.email_verification(user, token)
    Notifier.password_reset(user, token)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings

from toolkit.services.email import EmailService

if TYPE_CHECKING:
    from authentication.models import User
    from orders.models import Order

logger = logging.getLogger(__name__)


class Notifier:
    """Order and account notifications sent by email."""

    @classmethod
    def order_confirmation(cls, order: Order) -> bool:
        return cls._deliver(
            order,
            subject=f"Order Confirmation - #{order.id}",
            template_name="emails/order_confirmation",
        )

    @classmethod
    def shipping_update(cls, order: Order) -> bool:
        return cls._deliver(
            order,
            subject=f"Your order #{order.id} has shipped",
            template_name="emails/shipping_update",
        )

    @classmethod
    def email_verification(cls, user: User, token: str) -> bool:
        return cls._send(
            user.email,
            subject="Verify your email address",
            template_name="emails/verify_email",
            context={
                "customer_name": user.get_full_name(),
                "verify_url": f"{settings.FRONTEND_URL}/verify-email?token={token}",
            },
            log_extra={"user_id": user.id},
        )

    @classmethod
    def password_reset(cls, user: User, token: str) -> bool:
        return cls._send(
            user.email,
            subject="Reset your password",
            template_name="emails/password_reset",
            context={
                "customer_name": user.get_full_name(),
                "reset_url": f"{settings.FRONTEND_URL}/reset-password?token={token}",
            },
            log_extra={"user_id": user.id},
        )

    @classmethod
    def build_context(cls, order: Order) -> dict:
        """JSON-serializable template context for an order."""
        return {
            "customer_name": order.user.name or order.user.email,
            "order_id": order.id,
            "status": order.status,
            "tracking_number": order.tracking_number,
            "shipping_address": order.shipping_address,
            "items": [
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "price": str(item.price),
                }
                for item in order.items.all()
            ],
            "items_price": str(order.items_price),
            "tax_price": str(order.tax_price),
            "shipping_price": str(order.shipping_price),
            "total_price": str(order.total_price),
            "order_url": f"{settings.FRONTEND_URL}/orders/{order.id}",
        }

    @classmethod
    def _deliver(cls, order: Order, subject: str, template_name: str) -> bool:
        try:
            context = cls.build_context(order)
        except Exception:
            logger.warning(
                "Notification failed",
                extra={"order_id": order.id, "template": template_name},
                exc_info=True,
            )
            return False
        return cls._send(
            order.user.email,
            subject=subject,
            template_name=template_name,
            context=context,
            log_extra={"order_id": order.id},
        )

    @classmethod
    def _send(
        cls,
        recipient: str,
        subject: str,
        template_name: str,
        context: dict,
        log_extra: dict,
    ) -> bool:
        try:
            if settings.EMAIL_ASYNC:
                EmailService.send_async(
                    to=recipient,
                    subject=subject,
                    template_name=template_name,
                    context=context,
                )
                return True
            return EmailService.send(
                to=recipient,
                subject=subject,
                template_name=template_name,
                context=context,
            )
        except Exception:
            logger.warning(
                "Notification failed",
                extra={**log_extra, "template": template_name, "to": recipient},
                exc_info=True,
            )
            return False
