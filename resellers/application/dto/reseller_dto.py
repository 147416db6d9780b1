"""
Reseller DTOs for API responses.

Password hashes never leave the domain layer.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ResellerDTO:
    """DTO for reseller information."""

    id: int
    username: str
    credits: int
    created_at: datetime

    @classmethod
    def from_entity(cls, reseller) -> "ResellerDTO":
        return cls(
            id=reseller.id,
            username=str(reseller.username),
            credits=reseller.credits,
            created_at=reseller.created_at,
        )


@dataclass
class ReferralTokenDTO:
    """DTO for referral token information."""

    id: int
    token: str
    created_by: str
    used: bool
    used_by: Optional[str]
    created_at: datetime
    used_at: Optional[datetime]

    @classmethod
    def from_entity(cls, token) -> "ReferralTokenDTO":
        return cls(
            id=token.id,
            token=token.token,
            created_by=token.created_by,
            used=token.used,
            used_by=token.used_by,
            created_at=token.created_at,
            used_at=token.used_at,
        )


@dataclass
class DeleteResellerResultDTO:
    """DTO for the outcome of a reseller deletion."""

    reseller_id: int
    keys_revoked: int
