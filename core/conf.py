"""
Access to the LICENSE_SERVICE settings dict with defaults.
"""

from typing import Any

from django.conf import settings

DEFAULTS = {
    "SUPPORTED_GAMES": ("Free Fire",),
    "ALLOWED_DEVICE_LIMITS": (1, 2, 100),
    "MAX_EXPIRY_DAYS": 365,
    "KEY_ISSUE_COST": 1,
    "REFERRAL_TOKEN_PREFIX": "X-R-T0K3N-",
}


def service_setting(name: str) -> Any:
    """
    Return a LICENSE_SERVICE setting, falling back to the default.

    Args:
        name: Setting name (e.g. 'MAX_EXPIRY_DAYS')

    Returns:
        Configured value
    """
    if name not in DEFAULTS:
        raise KeyError(f"Unknown license service setting: {name}")
    overrides = getattr(settings, "LICENSE_SERVICE", {})
    return overrides.get(name, DEFAULTS[name])
