"""
Celery tasks for the toolkit app.

Tasks:
    send_email_task: Render and send a templated email
"""

from __future__ import annotations

import logging

from celery import shared_task

from toolkit.services.email import EmailService

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def send_email_task(
    self,
    to: str | list[str],
    subject: str,
    template_name: str,
    context: dict,
    **kwargs,
) -> bool:
    """
    Send a templated email in the background.

    Any sending error is raised so Celery retries with backoff.
    """
    logger.debug(
        "Sending queued email",
        extra={"to": to, "subject": subject, "attempt": self.request.retries + 1},
    )
    return EmailService.send(
        to=to,
        subject=subject,
        template_name=template_name,
        context=context,
        **kwargs,
    )
