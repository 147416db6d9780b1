"""
Reseller repository port (interface).

This defines the contract for reseller persistence operations.
Implementations are in the infrastructure layer. Every method that
changes a balance or spans two records must be atomic.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from resellers.domain.reseller import Reseller


class ResellerRepository(ABC):
    """
    Abstract repository for Reseller entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_by_id(self, reseller_id: int) -> Optional[Reseller]:
        """
        Find a reseller by ID.

        Args:
            reseller_id: Reseller id

        Returns:
            Reseller entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[Reseller]:
        """
        Find a reseller by username.

        Args:
            username: Reseller username

        Returns:
            Reseller entity or None if not found
        """
        pass

    @abstractmethod
    async def find_usernames(self, reseller_ids: List[int]) -> Dict[int, str]:
        """
        Resolve display usernames for a batch of reseller ids.

        Args:
            reseller_ids: Reseller ids

        Returns:
            Mapping of id to username for the ids that exist
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Reseller]:
        """
        List all resellers ordered by id.

        Returns:
            List of Reseller entities
        """
        pass

    @abstractmethod
    async def register_with_token(
        self, reseller: Reseller, token: str, used_at: datetime
    ) -> Reseller:
        """
        Consume a referral token and create the reseller as one unit.

        Args:
            reseller: New Reseller entity (without id)
            token: Referral token string
            used_at: Consumption time recorded on the token

        Returns:
            Saved Reseller entity with its id

        Raises:
            UsernameTakenError: If the username exists
            InvalidReferralTokenError: If the token is unknown or used
        """
        pass

    @abstractmethod
    async def add_credits(self, reseller_id: int, amount: int) -> Optional[Reseller]:
        """
        Atomically increment a reseller's balance.

        Args:
            reseller_id: Reseller id
            amount: Positive number of credits

        Returns:
            Updated Reseller entity or None if not found
        """
        pass

    @abstractmethod
    async def delete_and_revoke_keys(self, reseller_id: int) -> Optional[int]:
        """
        Deactivate and detach every key of the reseller, then delete it.

        Args:
            reseller_id: Reseller id

        Returns:
            Number of keys revoked, or None if the reseller was not found
        """
        pass
