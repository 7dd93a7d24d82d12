"""
Email service for centralized email sending.

This module provides the EmailService class for sending emails with:
- Django template rendering for HTML and plain text
- Async sending via Celery

Related files:
    - toolkit/tasks.py: Async email task
    - templates/emails/: Email templates

Configuration:
    Email settings are read from Django settings:
    - EMAIL_BACKEND
    - EMAIL_HOST, EMAIL_PORT
    - DEFAULT_FROM_EMAIL

Usage:
    from toolkit.services.email import EmailService

    # Send email with template
    EmailService.send(
        to="user@example.com",
        subject="Order Confirmation",
        template_name="emails/order_confirmation",
        context={"order_id": "665f..."}
    )

    # Send async
    EmailService.send_async(
        to="user@example.com",
        subject="Order Confirmation",
        template_name="emails/order_confirmation",
        context={"order_id": "665f..."}
    )
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)


class EmailService:
    """
    Centralized email sending with template support.

    Templates come in pairs: {template_name}.html and {template_name}.txt.
    Sending errors propagate to the caller; best-effort callers such as
    toolkit.services.notifications.Notifier catch and log them.
    """

    @staticmethod
    def send(
        to: str | list[str],
        subject: str,
        template_name: str,
        context: dict,
        from_email: str | None = None,
        reply_to: str | None = None,
    ) -> bool:
        """
        Send email using a template.

        Args:
            to: Recipient email address(es)
            subject: Email subject line
            template_name: Name of template (without extension)
                           Looks for: {template_name}.html and {template_name}.txt
            context: Template context variables
            from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)
            reply_to: Reply-to address

        Returns:
            True if the backend accepted the message
        """
        if isinstance(to, str):
            to = [to]

        text_content = render_to_string(f"{template_name}.txt", context)
        html_content = render_to_string(f"{template_name}.html", context)

        email = EmailMultiAlternatives(
            subject=subject,
            body=text_content,
            from_email=from_email or settings.DEFAULT_FROM_EMAIL,
            to=to,
            reply_to=[reply_to] if reply_to else None,
        )
        email.attach_alternative(html_content, "text/html")

        sent = email.send(fail_silently=False)
        logger.info(
            "Email sent",
            extra={"to": to, "subject": subject, "template": template_name},
        )
        return bool(sent)

    @staticmethod
    def send_async(
        to: str | list[str],
        subject: str,
        template_name: str,
        context: dict,
        **kwargs,
    ) -> None:
        """
        Queue email for async sending via Celery.

        Note:
            Context must be JSON-serializable for Celery.
        """
        from toolkit.tasks import send_email_task

        send_email_task.delay(
            to=to,
            subject=subject,
            template_name=template_name,
            context=context,
            **kwargs,
        )
        logger.debug("Email queued", extra={"to": to, "subject": subject})
