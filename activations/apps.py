"""
App configuration for the activations app.
"""

from django.apps import AppConfig


class ActivationsConfig(AppConfig):
    """App configuration for activations."""

    name = "activations"
    verbose_name = "Activations"
    default_auto_field = "django.db.models.BigAutoField"
