"""
Referral and registration handlers.

An admin issues single-use referral tokens; a prospective reseller
redeems one to create an account with an empty balance.
"""

import logging
from typing import List

from core.conf import service_setting
from core.domain.clock import Clock, utc_now
from core.domain.exceptions import ValidationError
from core.metrics import resellers_registered_total
from resellers.application.commands.issue_referral_token import IssueReferralTokenCommand
from resellers.application.commands.register_reseller import RegisterResellerCommand
from resellers.application.dto.reseller_dto import ReferralTokenDTO, ResellerDTO
from resellers.application.queries.list_referral_tokens import ListReferralTokensQuery
from resellers.domain.referral_token import ReferralToken
from resellers.domain.reseller import Reseller
from resellers.ports.referral_token_repository import ReferralTokenRepository
from resellers.ports.reseller_repository import ResellerRepository

logger = logging.getLogger(__name__)


class IssueReferralTokenHandler:
    """Handler for IssueReferralTokenCommand."""

    def __init__(
        self,
        referral_token_repository: ReferralTokenRepository,
        clock: Clock = utc_now,
    ):
        """Initialize handler with repositories."""
        self.referral_token_repository = referral_token_repository
        self.clock = clock

    async def handle(self, command: IssueReferralTokenCommand) -> ReferralTokenDTO:
        """
        Mint and persist a new unused referral token.

        Args:
            command: IssueReferralTokenCommand

        Returns:
            ReferralTokenDTO
        """
        token = ReferralToken.create(
            created_by=command.created_by,
            prefix=service_setting("REFERRAL_TOKEN_PREFIX"),
            created_at=self.clock(),
        )
        saved = await self.referral_token_repository.save(token)
        logger.info("Referral token issued", extra={"created_by": command.created_by})
        return ReferralTokenDTO.from_entity(saved)


class RegisterResellerHandler:
    """Handler for RegisterResellerCommand."""

    def __init__(
        self,
        reseller_repository: ResellerRepository,
        clock: Clock = utc_now,
    ):
        """Initialize handler with repositories."""
        self.reseller_repository = reseller_repository
        self.clock = clock

    async def handle(self, command: RegisterResellerCommand) -> ResellerDTO:
        """
        Handle register reseller command.

        The username check, the token consumption and the insert are
        performed by the repository as one atomic unit.

        Args:
            command: RegisterResellerCommand

        Returns:
            ResellerDTO of the new account (0 credits)

        Raises:
            ValidationError: If username or password are malformed
            UsernameTakenError: If the username exists
            InvalidReferralTokenError: If the token is unknown or used
        """
        now = self.clock()
        try:
            reseller = Reseller.create(
                username=command.username,
                password=command.password,
                created_at=now,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        saved = await self.reseller_repository.register_with_token(
            reseller, command.referral_token.strip(), used_at=now
        )
        resellers_registered_total.inc()
        logger.info(
            "Reseller registered",
            extra={"reseller_id": saved.id, "username": str(saved.username)},
        )
        return ResellerDTO.from_entity(saved)


class ListReferralTokensHandler:
    """Handler for ListReferralTokensQuery."""

    def __init__(self, referral_token_repository: ReferralTokenRepository):
        self.referral_token_repository = referral_token_repository

    async def handle(self, query: ListReferralTokensQuery) -> List[ReferralTokenDTO]:
        tokens = await self.referral_token_repository.list_all()
        return [ReferralTokenDTO.from_entity(t) for t in tokens]
