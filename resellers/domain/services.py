"""
Reseller domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from core.domain.exceptions import (
    InsufficientCreditsError,
    InvalidAmountError,
    ResellerNotFoundError,
)
from resellers.domain.reseller import Reseller
from resellers.ports.reseller_repository import ResellerRepository


class CreditLedger:
    """
    Domain service for reseller credit balances.

    Debits never happen on their own: they are applied by the key registry
    in the same transaction as the key insert (see
    LicenseKeyRepository.create_with_debit). This service validates amounts
    and applies top-ups.
    """

    @staticmethod
    def validate_amount(amount) -> int:
        """
        Check that ``amount`` is a positive integer.

        Args:
            amount: Candidate credit amount

        Returns:
            The amount

        Raises:
            InvalidAmountError: If amount is not a positive int
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError()
        return amount

    @staticmethod
    def ensure_can_afford(reseller: Reseller, cost: int) -> None:
        """
        Fail fast before issuing a key the reseller cannot pay for.

        The authoritative check is repeated atomically by the repository.

        Raises:
            InsufficientCreditsError: If the balance is below ``cost``
        """
        if not reseller.can_afford(cost):
            raise InsufficientCreditsError()

    @staticmethod
    async def add_credits(
        reseller_id: int,
        amount: int,
        repository: ResellerRepository,
    ) -> Reseller:
        """
        Add credits to a reseller balance.

        Args:
            reseller_id: Reseller id
            amount: Positive number of credits
            repository: Reseller repository

        Returns:
            Updated Reseller entity

        Raises:
            InvalidAmountError: If amount is not a positive int
            ResellerNotFoundError: If the reseller does not exist
        """
        amount = CreditLedger.validate_amount(amount)
        updated = await repository.add_credits(reseller_id, amount)
        if updated is None:
            raise ResellerNotFoundError(f"Reseller {reseller_id} not found")
        return updated
