"""
Reseller domain entity.

A reseller spends credits to mint license keys for end users.
Passwords are kept as salted hashes produced by Django's hashers.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from django.contrib.auth.hashers import check_password, make_password

from core.domain.clock import utc_now
from core.domain.value_objects import Username

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class Reseller:
    """
    Reseller domain entity.

    The numeric id is assigned by the store on first save and never
    changes; keys reference their owner by this id.
    """

    id: Optional[int]
    username: Username
    password_hash: str
    credits: int
    created_at: datetime

    def __post_init__(self):
        """Validate reseller entity."""
        if not self.password_hash:
            raise ValueError("Password hash is required")
        if isinstance(self.credits, bool) or not isinstance(self.credits, int):
            raise ValueError("Credits must be an integer")
        if self.credits < 0:
            raise ValueError("Credits cannot be negative")

    @classmethod
    def create(
        cls,
        username: str,
        password: str,
        created_at: Optional[datetime] = None,
    ) -> "Reseller":
        """
        Create a new Reseller entity with an empty balance.

        Args:
            username: Unique login name
            password: Raw password (hashed here, never stored)
            created_at: Creation time (defaults to now)

        Returns:
            Reseller entity instance without an id
        """
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        return cls(
            id=None,
            username=Username(username.strip()),
            password_hash=make_password(password),
            credits=0,
            created_at=created_at or utc_now(),
        )

    def check_password(self, raw_password: str) -> bool:
        """
        Verify a raw password against the stored hash.

        Args:
            raw_password: Password supplied at login

        Returns:
            True if it matches
        """
        return check_password(raw_password, self.password_hash)

    def can_afford(self, cost: int) -> bool:
        """Check whether the balance covers ``cost`` credits."""
        return self.credits >= cost

    def with_credits(self, credits: int) -> "Reseller":
        """Return a copy carrying a new balance."""
        return replace(self, credits=credits)
