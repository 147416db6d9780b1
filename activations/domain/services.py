"""
Verification domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from activations.ports.device_registration_repository import (
    DeviceRegistrationRepository,
)
from core.domain.exceptions import DeviceLimitReachedError
from core.domain.value_objects import DeviceIdentifier, VerificationReason
from licenses.ports.license_key_repository import LicenseKeyRepository

MESSAGES = {
    VerificationReason.VALID: "Key validated successfully",
    VerificationReason.DEVICE_REGISTERED: "Key validated and device registered",
    VerificationReason.INVALID_KEY: "Invalid key",
    VerificationReason.REVOKED: "Key has been revoked",
    VerificationReason.EXPIRED: "Key has expired",
    VerificationReason.INVALID_INPUT: "Key and deviceId are required",
}


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of one verification attempt."""

    accepted: bool
    reason: VerificationReason
    message: str
    game: Optional[str] = None
    expires_at: Optional[datetime] = None
    newly_bound: bool = False

    @classmethod
    def rejected(cls, reason: VerificationReason, message: Optional[str] = None):
        return cls(accepted=False, reason=reason, message=message or MESSAGES[reason])


class VerificationEngine:
    """
    Domain service deciding whether a key may be used on a device.

    Checks run in a fixed order and stop at the first failure:
    existence, revocation, expiry, then device binding. Only the last
    step writes, and it does so atomically through the registration
    repository.
    """

    @staticmethod
    async def verify(
        key: str,
        device_id: str,
        now: datetime,
        license_key_repository: LicenseKeyRepository,
        registration_repository: DeviceRegistrationRepository,
    ) -> VerificationResult:
        """
        Verify a key for a device.

        Args:
            key: Key string presented by the client
            device_id: Device identifier presented by the client
            now: Current time
            license_key_repository: Key registry
            registration_repository: Device-binding ledger

        Returns:
            VerificationResult
        """
        if not key or not key.strip():
            return VerificationResult.rejected(VerificationReason.INVALID_INPUT)
        try:
            device_id = str(DeviceIdentifier(device_id))
        except ValueError:
            return VerificationResult.rejected(VerificationReason.INVALID_INPUT)

        license_key = await license_key_repository.find_by_key(key)
        if license_key is None:
            return VerificationResult.rejected(VerificationReason.INVALID_KEY)

        if not license_key.is_active:
            return VerificationResult.rejected(VerificationReason.REVOKED)

        if license_key.is_expired(now):
            return VerificationResult.rejected(VerificationReason.EXPIRED)

        try:
            _, created = await registration_repository.bind_device(
                license_key, device_id, now
            )
        except DeviceLimitReachedError as e:
            return VerificationResult.rejected(
                VerificationReason.DEVICE_LIMIT_REACHED, e.message
            )

        reason = VerificationReason.DEVICE_REGISTERED if created else VerificationReason.VALID
        return VerificationResult(
            accepted=True,
            reason=reason,
            message=MESSAGES[reason],
            game=license_key.game,
            expires_at=license_key.expires_at,
            newly_bound=created,
        )
