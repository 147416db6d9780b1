"""
ReferralToken domain entity.

An admin issues a referral token; a new reseller consumes it exactly once
while registering.
"""

import secrets
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.clock import utc_now


def generate_referral_token(prefix: str) -> str:
    """
    Generate an opaque referral token: prefix followed by 24 hex characters.

    Args:
        prefix: Token prefix (e.g. 'X-R-T0K3N-')

    Returns:
        Generated token string
    """
    return f"{prefix}{secrets.token_hex(12).upper()}"


@dataclass(frozen=True)
class ReferralToken:
    """ReferralToken domain entity."""

    id: Optional[int]
    token: str
    created_by: str
    used: bool
    used_by: Optional[str]
    created_at: datetime
    used_at: Optional[datetime]

    def __post_init__(self):
        """Validate referral token entity."""
        if not self.token or len(self.token.strip()) == 0:
            raise ValueError("Referral token cannot be empty")
        if not self.created_by:
            raise ValueError("Referral token creator is required")
        if self.used and not self.used_by:
            raise ValueError("A used referral token must record who used it")

    @classmethod
    def create(
        cls,
        created_by: str,
        prefix: str,
        created_at: Optional[datetime] = None,
    ) -> "ReferralToken":
        """
        Create a new unused referral token.

        Args:
            created_by: Issuing admin username
            prefix: Token prefix
            created_at: Creation time (defaults to now)

        Returns:
            ReferralToken entity instance
        """
        return cls(
            id=None,
            token=generate_referral_token(prefix),
            created_by=created_by,
            used=False,
            used_by=None,
            created_at=created_at or utc_now(),
            used_at=None,
        )

    def consume(self, username: str, used_at: Optional[datetime] = None) -> "ReferralToken":
        """
        Return a copy marked as used by ``username``.

        Raises:
            ValueError: If the token was already used
        """
        if self.used:
            raise ValueError("Referral token already used")
        return replace(self, used=True, used_by=username, used_at=used_at or utc_now())
