"""
Toolkit - shared outbound services.

This app provides services used across the storefront apps:
- EmailService: Centralized email sending with templates
- Notifier: Best-effort order notifications built on EmailService
- send_email_task: Celery task for async email delivery

Key components:
    - services/email.py: EmailService class
    - services/notifications.py: Notifier class
    - tasks.py: send_email_task

Usage:
    from toolkit.services.email import EmailService
    from toolkit.services.notifications import Notifier

Note:
    - This app has no models.
    - For generic infrastructure (base models, exceptions, responses), see core/
"""
