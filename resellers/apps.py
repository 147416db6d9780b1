"""
App configuration for the resellers app.
"""

from django.apps import AppConfig


class ResellersConfig(AppConfig):
    """App configuration for resellers."""

    name = "resellers"
    verbose_name = "Resellers"
    default_auto_field = "django.db.models.BigAutoField"
