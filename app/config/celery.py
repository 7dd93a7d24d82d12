"""
Celery configuration for the Django application.

The storefront uses Celery for outbound email (order confirmation and
shipping updates) when EMAIL_ASYNC is enabled. Redis is both the broker and
the result backend. Periodic tasks are stored by django-celery-beat.

Tasks are auto-discovered from the tasks.py module of every installed app.

Usage:
    from toolkit.tasks import send_email_task

    send_email_task.delay(to=email, subject=subject, template_name=name, context={})

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
