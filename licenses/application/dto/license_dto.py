"""
License key DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional


@dataclass
class LicenseKeyDTO:
    """
    DTO for license key information.

    ``created_by`` is the owner's username, resolved when the DTO is
    built; it is None once the owner has been deleted.
    """

    id: int
    key: str
    game: str
    device_limit: int
    expiry_days: int
    reseller_id: Optional[int]
    created_by: Optional[str]
    created_at: datetime
    expires_at: datetime
    is_active: bool

    @classmethod
    def from_entity(cls, license_key, usernames: Dict[int, str]) -> "LicenseKeyDTO":
        return cls(
            id=license_key.id,
            key=license_key.key,
            game=license_key.game,
            device_limit=license_key.device_limit,
            expiry_days=license_key.expiry_days,
            reseller_id=license_key.reseller_id,
            created_by=usernames.get(license_key.reseller_id),
            created_at=license_key.created_at,
            expires_at=license_key.expires_at,
            is_active=license_key.is_active,
        )


@dataclass
class IssueKeyResponseDTO:
    """DTO for the issue key response."""

    license_key: LicenseKeyDTO
    credits_remaining: int
