"""
App configuration for Reseller License Service.
"""

import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

# Management commands that never serve requests
SKIP_COMMANDS = ("migrate", "makemigrations", "collectstatic", "shell", "check")


class ResellerLicenseServiceConfig(AppConfig):
    """App configuration for ResellerLicenseService."""

    name = "ResellerLicenseService"
    verbose_name = "Reseller License Service"

    def ready(self):
        """Called when Django starts."""
        if not settings.OTEL_ENABLED:
            return

        if len(sys.argv) > 1 and sys.argv[1] in SKIP_COMMANDS:
            return

        # Django's autoreloader imports the project twice; set up in the child only
        if os.environ.get("RUN_MAIN") == "false":
            return

        from core.instrumentation import setup_opentelemetry

        logger.info("Setting up observability...")
        setup_opentelemetry()
        logger.info("Observability setup complete")
