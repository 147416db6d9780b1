"""
LicenseKey domain entity.

This is the core domain entity representing a license key.
It contains business logic and is independent of infrastructure.
"""

import re
import secrets
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from core.domain.clock import utc_now

MIN_KEY_LENGTH = 5
MAX_KEY_LENGTH = 100


def key_prefix_for_game(game: str) -> str:
    """
    Derive the key prefix from a game title: uppercased, whitespace removed.

    'Free Fire' -> 'FREEFIRE'
    """
    return re.sub(r"\s+", "", game.upper())


def generate_license_key(game: str) -> str:
    """
    Generate a license key in format: PREFIX-XXXXXX-XXXXXX.

    The twelve body characters are uppercase hex taken from a
    cryptographically secure source.

    Args:
        game: Game title the key unlocks

    Returns:
        Generated license key string
    """
    body = secrets.token_hex(8).upper()
    return f"{key_prefix_for_game(game)}-{body[0:6]}-{body[6:12]}"


@dataclass(frozen=True)
class LicenseKey:
    """
    LicenseKey domain entity.

    A key is owned by the reseller that minted it (by numeric id). The
    owner reference becomes None once that reseller is deleted.
    """

    id: Optional[int]
    key: str
    game: str
    device_limit: int
    expiry_days: int
    reseller_id: Optional[int]
    created_at: datetime
    expires_at: datetime
    is_active: bool = True

    def __post_init__(self):
        """Validate license key entity."""
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if len(self.key) > MAX_KEY_LENGTH:
            raise ValueError("License key too long")
        if not self.game:
            raise ValueError("Game is required")
        if self.device_limit < 1:
            raise ValueError("Device limit must be at least 1")
        if self.expiry_days < 1:
            raise ValueError("Expiry days must be at least 1")

    @classmethod
    def create(
        cls,
        game: str,
        device_limit: int,
        expiry_days: int,
        reseller_id: Optional[int],
        key: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> "LicenseKey":
        """
        Create a new active LicenseKey entity.

        Args:
            game: Game title
            device_limit: Maximum number of bound devices
            expiry_days: Validity period in days
            reseller_id: Owning reseller id
            key: Custom key string (generated from the game if omitted)
            created_at: Creation time (defaults to now)

        Returns:
            LicenseKey entity instance without an id
        """
        now = created_at or utc_now()
        return cls(
            id=None,
            key=key or generate_license_key(game),
            game=game,
            device_limit=device_limit,
            expiry_days=expiry_days,
            reseller_id=reseller_id,
            created_at=now,
            expires_at=now + timedelta(days=expiry_days),
            is_active=True,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """A key is expired from the instant ``expires_at`` is reached."""
        return (now or utc_now()) >= self.expires_at

    def is_owned_by(self, reseller_id: int) -> bool:
        return self.reseller_id is not None and self.reseller_id == reseller_id

    def deactivate(self) -> "LicenseKey":
        """Return a revoked copy. Revocation is permanent."""
        return replace(self, is_active=False)

    def reset(self, now: Optional[datetime] = None) -> "LicenseKey":
        """
        Return a copy whose validity period restarts at ``now``.

        Raises:
            ValueError: If the key was revoked
        """
        if not self.is_active:
            raise ValueError("Cannot reset a revoked key")
        now = now or utc_now()
        return replace(self, expires_at=now + timedelta(days=self.expiry_days))
