"""
Model registration for the resellers app.

Django discovers models through ``<app>.models``; the ORM models live in
the infrastructure layer.
"""

from resellers.infrastructure.models import ReferralToken, Reseller  # noqa: F401
