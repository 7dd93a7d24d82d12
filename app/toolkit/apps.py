from django.apps import AppConfig


class ToolkitConfig(AppConfig):
    """Email delivery and order notifications."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "toolkit"
