"""
Clock used by the domain for timestamps and expiry checks.

Handlers accept a ``clock`` callable so that tests can move time forward
without patching.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
