"""
Django app configuration for the cart.
"""

from django.apps import AppConfig


class CartConfig(AppConfig):
    """Configuration for the cart application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "cart"
    verbose_name = "Cart"
