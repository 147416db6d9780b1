"""
Model registration for the licenses app.
"""

from licenses.infrastructure.models import LicenseKey  # noqa: F401
