"""
App configuration for the licenses app.
"""

from django.apps import AppConfig


class LicensesConfig(AppConfig):
    """App configuration for licenses."""

    name = "licenses"
    verbose_name = "Licenses"
    default_auto_field = "django.db.models.BigAutoField"
