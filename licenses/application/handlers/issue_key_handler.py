"""
IssueKeyHandler.

Handles the issue key command: validate, debit one credit, store the key.
"""

import logging

from core.conf import service_setting
from core.domain.clock import Clock, utc_now
from core.domain.exceptions import ResellerNotFoundError
from core.metrics import keys_issued_total
from licenses.application.commands.issue_key import IssueKeyCommand
from licenses.application.dto.license_dto import IssueKeyResponseDTO, LicenseKeyDTO
from licenses.domain.license_key import LicenseKey
from licenses.domain.services import KeyIssuePolicy
from licenses.ports.license_key_repository import LicenseKeyRepository
from resellers.domain.services import CreditLedger
from resellers.ports.reseller_repository import ResellerRepository

logger = logging.getLogger(__name__)


class IssueKeyHandler:
    """Handler for IssueKeyCommand."""

    def __init__(
        self,
        reseller_repository: ResellerRepository,
        license_key_repository: LicenseKeyRepository,
        clock: Clock = utc_now,
    ):
        """Initialize handler with repositories."""
        self.reseller_repository = reseller_repository
        self.license_key_repository = license_key_repository
        self.clock = clock

    async def handle(self, command: IssueKeyCommand) -> IssueKeyResponseDTO:
        """
        Handle issue key command.

        Args:
            command: IssueKeyCommand

        Returns:
            IssueKeyResponseDTO with the key and the remaining balance

        Raises:
            ValidationError: If the parameters are out of range
            ResellerNotFoundError: If the reseller does not exist
            InsufficientCreditsError: If the balance cannot cover the cost
            DuplicateKeyError: If the key string is taken
        """
        terms = KeyIssuePolicy.validate(
            game=command.game,
            device_limit=command.device_limit,
            expiry_days=command.expiry_days,
            custom_key=command.custom_key,
        )

        reseller = await self.reseller_repository.find_by_id(command.reseller_id)
        if not reseller:
            raise ResellerNotFoundError(f"Reseller {command.reseller_id} not found")

        cost = service_setting("KEY_ISSUE_COST")
        CreditLedger.ensure_can_afford(reseller, cost)

        license_key = LicenseKey.create(
            game=terms.game,
            device_limit=terms.device_limit,
            expiry_days=terms.expiry_days,
            reseller_id=reseller.id,
            key=terms.custom_key,
            created_at=self.clock(),
        )

        saved, remaining = await self.license_key_repository.create_with_debit(
            license_key, cost
        )

        keys_issued_total.labels(game=saved.game).inc()
        logger.info(
            "License key issued",
            extra={
                "key_id": saved.id,
                "reseller_id": reseller.id,
                "game": saved.game,
                "credits_remaining": remaining,
            },
        )

        return IssueKeyResponseDTO(
            license_key=LicenseKeyDTO.from_entity(
                saved, {reseller.id: str(reseller.username)}
            ),
            credits_remaining=remaining,
        )
