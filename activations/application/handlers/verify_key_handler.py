"""
VerifyKeyHandler.

Handler for the public key verification endpoint.
"""

import logging

from activations.application.commands.verify_key import VerifyKeyCommand
from activations.domain.services import VerificationEngine, VerificationResult
from activations.ports.device_registration_repository import (
    DeviceRegistrationRepository,
)
from core.domain.clock import Clock, utc_now
from core.metrics import key_verifications_total
from licenses.ports.license_key_repository import LicenseKeyRepository

logger = logging.getLogger(__name__)


class VerifyKeyHandler:
    """Handler for VerifyKeyCommand."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        registration_repository: DeviceRegistrationRepository,
        clock: Clock = utc_now,
    ):
        """Initialize handler with repositories."""
        self.license_key_repository = license_key_repository
        self.registration_repository = registration_repository
        self.clock = clock

    async def handle(self, command: VerifyKeyCommand) -> VerificationResult:
        """
        Handle verify key command.

        Rejections are returned, not raised; only unexpected failures
        propagate.

        Args:
            command: VerifyKeyCommand

        Returns:
            VerificationResult
        """
        result = await VerificationEngine.verify(
            key=command.key,
            device_id=command.device_id,
            now=self.clock(),
            license_key_repository=self.license_key_repository,
            registration_repository=self.registration_repository,
        )

        key_verifications_total.labels(reason=result.reason.value).inc()
        logger.info(
            "Key verification",
            extra={
                "accepted": result.accepted,
                "reason": result.reason.value,
                "newly_bound": result.newly_bound,
            },
        )
        return result
