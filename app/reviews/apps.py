"""
Django app configuration for product reviews.
"""

from django.apps import AppConfig


class ReviewsConfig(AppConfig):
    """Configuration for the reviews application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "reviews"
    verbose_name = "Reviews"
