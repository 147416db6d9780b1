"""
Key lifecycle handlers.

Handlers for the revoke and reset key commands. Both are restricted to
the reseller that owns the key.
"""
import logging

from core.domain.clock import Clock, utc_now
from core.domain.exceptions import KeyRevokedError, LicenseKeyNotFoundError
from core.metrics import keys_reset_total, keys_revoked_total
from licenses.application.commands.reset_key import ResetKeyCommand
from licenses.application.commands.revoke_key import RevokeKeyCommand
from licenses.application.dto.license_dto import LicenseKeyDTO
from licenses.domain.services import KeyOwnership
from licenses.ports.license_key_repository import LicenseKeyRepository
from resellers.ports.reseller_repository import ResellerRepository

logger = logging.getLogger(__name__)


class RevokeKeyHandler:
    """Handler for RevokeKeyCommand."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        reseller_repository: ResellerRepository,
    ):
        """Initialize handler with repositories."""
        self.license_key_repository = license_key_repository
        self.reseller_repository = reseller_repository

    async def handle(self, command: RevokeKeyCommand) -> LicenseKeyDTO:
        """
        Handle revoke key command.

        Revoking an already revoked key succeeds again.

        Args:
            command: RevokeKeyCommand

        Returns:
            LicenseKeyDTO of the revoked key

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
            KeyOwnershipError: If the caller does not own the key
        """
        license_key = await self.license_key_repository.find_by_id(command.key_id)
        if not license_key:
            raise LicenseKeyNotFoundError()

        KeyOwnership.ensure_owned(license_key, command.reseller_id)

        revoked = await self.license_key_repository.deactivate(license_key.id)
        if not revoked:
            raise LicenseKeyNotFoundError()

        keys_revoked_total.inc()
        logger.info(
            "License key revoked",
            extra={"key_id": revoked.id, "reseller_id": command.reseller_id},
        )

        usernames = await self.reseller_repository.find_usernames([revoked.reseller_id])
        return LicenseKeyDTO.from_entity(revoked, usernames)


class ResetKeyHandler:
    """Handler for ResetKeyCommand."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        reseller_repository: ResellerRepository,
        clock: Clock = utc_now,
    ):
        """Initialize handler with repositories."""
        self.license_key_repository = license_key_repository
        self.reseller_repository = reseller_repository
        self.clock = clock

    async def handle(self, command: ResetKeyCommand) -> LicenseKeyDTO:
        """
        Handle reset key command.

        Every device binding is dropped and the key is valid for another
        ``expiry_days`` counted from now. No credit is charged.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
            KeyOwnershipError: If the caller does not own the key
            KeyRevokedError: If the key was revoked
        """
        license_key = await self.license_key_repository.find_by_id(command.key_id)
        if not license_key:
            raise LicenseKeyNotFoundError()

        KeyOwnership.ensure_owned(license_key, command.reseller_id)

        try:
            expires_at = license_key.reset(self.clock()).expires_at
        except ValueError as e:
            raise KeyRevokedError("Cannot reset a revoked key") from e

        reset = await self.license_key_repository.reset(license_key.id, expires_at)
        if not reset:
            raise LicenseKeyNotFoundError()

        keys_reset_total.inc()
        logger.info(
            "License key reset",
            extra={"key_id": reset.id, "reseller_id": command.reseller_id},
        )

        usernames = await self.reseller_repository.find_usernames([reset.reseller_id])
        return LicenseKeyDTO.from_entity(reset, usernames)
