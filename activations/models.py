"""
Model registration for the activations app.
"""

from activations.infrastructure.models import DeviceRegistration  # noqa: F401
