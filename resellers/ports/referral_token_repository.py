"""
ReferralToken repository port (interface).

Token consumption happens in ResellerRepository.register_with_token,
together with the reseller insert.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from resellers.domain.referral_token import ReferralToken


class ReferralTokenRepository(ABC):
    """Abstract repository for ReferralToken entities."""

    @abstractmethod
    async def save(self, token: ReferralToken) -> ReferralToken:
        """
        Save a new referral token.

        Args:
            token: ReferralToken entity to save

        Returns:
            Saved entity with its id
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: str) -> Optional[ReferralToken]:
        """
        Find a referral token by its string.

        Args:
            token: Token string

        Returns:
            ReferralToken entity or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[ReferralToken]:
        """
        List every referral token, newest first.

        Returns:
            List of ReferralToken entities
        """
        pass
