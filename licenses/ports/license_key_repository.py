"""
LicenseKey repository port (interface).

This defines the contract for license key persistence operations.
Implementations are in the infrastructure layer. There is one
authoritative registry of keys; lookups by key string and by owner
read from it directly.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from licenses.domain.license_key import LicenseKey


class LicenseKeyRepository(ABC):
    """
    Abstract repository for LicenseKey entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def create(self, license_key: LicenseKey) -> LicenseKey:
        """
        Insert a key without charging anyone.

        Args:
            license_key: New LicenseKey entity (without id)

        Returns:
            Saved license key entity

        Raises:
            DuplicateKeyError: If the key string exists
        """
        pass

    @abstractmethod
    async def create_with_debit(
        self, license_key: LicenseKey, cost: int
    ) -> Tuple[LicenseKey, int]:
        """
        Debit the owner and insert the key as one atomic unit.

        Either both effects happen or neither does.

        Args:
            license_key: New LicenseKey entity owned by a reseller
            cost: Credits to debit

        Returns:
            Tuple of (saved key, owner's remaining credits)

        Raises:
            ResellerNotFoundError: If the owner does not exist
            InsufficientCreditsError: If the owner's balance is below cost
            DuplicateKeyError: If the key string exists
        """
        pass

    @abstractmethod
    async def find_by_id(self, key_id: int) -> Optional[LicenseKey]:
        """
        Find a license key by ID.

        Args:
            key_id: License key id

        Returns:
            LicenseKey entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[LicenseKey]:
        """
        Find a license key by key string (exact, case-sensitive).

        Args:
            key: License key string

        Returns:
            LicenseKey entity or None if not found
        """
        pass

    @abstractmethod
    async def list_by_reseller(self, reseller_id: int) -> List[LicenseKey]:
        """
        List keys owned by a reseller, newest first.

        Args:
            reseller_id: Owning reseller id

        Returns:
            List of LicenseKey entities
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[LicenseKey]:
        """
        List every key, newest first.

        Returns:
            List of LicenseKey entities
        """
        pass

    @abstractmethod
    async def deactivate(self, key_id: int) -> Optional[LicenseKey]:
        """
        Mark a key inactive. Idempotent.

        Args:
            key_id: License key id

        Returns:
            Updated entity or None if not found
        """
        pass

    @abstractmethod
    async def reset(self, key_id: int, expires_at: datetime) -> Optional[LicenseKey]:
        """
        Remove every device binding of a key and set a new expiry.

        Args:
            key_id: License key id
            expires_at: New expiry instant

        Returns:
            Updated entity or None if not found

        Raises:
            KeyRevokedError: If the key is inactive
        """
        pass
