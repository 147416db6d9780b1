"""
Reseller account handlers: login, balance, top-up, deletion.
"""

import logging
from typing import List

from core.domain.exceptions import InvalidCredentialsError, ResellerNotFoundError
from core.metrics import credits_added_total, keys_revoked_total
from resellers.application.commands.add_credits import AddCreditsCommand
from resellers.application.commands.authenticate_reseller import (
    AuthenticateResellerCommand,
)
from resellers.application.commands.delete_reseller import DeleteResellerCommand
from resellers.application.dto.reseller_dto import DeleteResellerResultDTO, ResellerDTO
from resellers.application.queries.get_reseller import GetResellerQuery
from resellers.application.queries.list_resellers import ListResellersQuery
from resellers.domain.services import CreditLedger
from resellers.ports.reseller_repository import ResellerRepository

logger = logging.getLogger(__name__)


class AuthenticateResellerHandler:
    """Handler for AuthenticateResellerCommand."""

    def __init__(self, reseller_repository: ResellerRepository):
        """Initialize handler with repositories."""
        self.reseller_repository = reseller_repository

    async def handle(self, command: AuthenticateResellerCommand) -> ResellerDTO:
        """
        Check a username/password pair.

        Unknown usernames and wrong passwords raise the same error.

        Raises:
            InvalidCredentialsError: If the credentials do not match
        """
        reseller = await self.reseller_repository.find_by_username(command.username)
        if reseller is None or not reseller.check_password(command.password):
            logger.info("Reseller login failed", extra={"username": command.username})
            raise InvalidCredentialsError()
        return ResellerDTO.from_entity(reseller)


class AddCreditsHandler:
    """Handler for AddCreditsCommand."""

    def __init__(self, reseller_repository: ResellerRepository):
        """Initialize handler with repositories."""
        self.reseller_repository = reseller_repository

    async def handle(self, command: AddCreditsCommand) -> ResellerDTO:
        """
        Handle add credits command.

        Args:
            command: AddCreditsCommand

        Returns:
            ResellerDTO with the new balance

        Raises:
            InvalidAmountError: If the amount is not a positive integer
            ResellerNotFoundError: If the reseller does not exist
        """
        updated = await CreditLedger.add_credits(
            command.reseller_id, command.amount, self.reseller_repository
        )
        credits_added_total.inc(command.amount)
        logger.info(
            "Credits added",
            extra={
                "reseller_id": updated.id,
                "amount": command.amount,
                "balance": updated.credits,
            },
        )
        return ResellerDTO.from_entity(updated)


class DeleteResellerHandler:
    """Handler for DeleteResellerCommand."""

    def __init__(self, reseller_repository: ResellerRepository):
        """Initialize handler with repositories."""
        self.reseller_repository = reseller_repository

    async def handle(self, command: DeleteResellerCommand) -> DeleteResellerResultDTO:
        """
        Delete a reseller; every key it owns is revoked and detached.

        Raises:
            ResellerNotFoundError: If the reseller does not exist
        """
        revoked = await self.reseller_repository.delete_and_revoke_keys(command.reseller_id)
        if revoked is None:
            raise ResellerNotFoundError(f"Reseller {command.reseller_id} not found")

        if revoked:
            keys_revoked_total.inc(revoked)
        logger.info(
            "Reseller deleted",
            extra={"reseller_id": command.reseller_id, "keys_revoked": revoked},
        )
        return DeleteResellerResultDTO(reseller_id=command.reseller_id, keys_revoked=revoked)


class GetResellerHandler:
    """Handler for GetResellerQuery."""

    def __init__(self, reseller_repository: ResellerRepository):
        self.reseller_repository = reseller_repository

    async def handle(self, query: GetResellerQuery) -> ResellerDTO:
        reseller = await self.reseller_repository.find_by_id(query.reseller_id)
        if reseller is None:
            raise ResellerNotFoundError(f"Reseller {query.reseller_id} not found")
        return ResellerDTO.from_entity(reseller)


class ListResellersHandler:
    """Handler for ListResellersQuery."""

    def __init__(self, reseller_repository: ResellerRepository):
        self.reseller_repository = reseller_repository

    async def handle(self, query: ListResellersQuery) -> List[ResellerDTO]:
        resellers = await self.reseller_repository.list_all()
        return [ResellerDTO.from_entity(r) for r in resellers]
