"""
Service classes for toolkit app.

This package contains service classes for common operations:
- EmailService: Email sending with template support
- Notifier: Best-effort order notifications

Usage:
    from toolkit.services import EmailService, Notifier
    from toolkit.services.email import EmailService  # Alternative import
"""

from toolkit.services.email import EmailService
from toolkit.services.notifications import Notifier

__all__ = ["EmailService", "Notifier"]
