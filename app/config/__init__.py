"""
Project configuration package: settings, URLs, ASGI/WSGI and Celery.

The Celery app is imported here so shared_task functions (toolkit.tasks)
bind to it as soon as Django starts.
"""

from config.celery import app as celery_app

__all__ = ("celery_app",)
