"""
Key listing handlers.

Owner usernames are resolved at read time from the reseller ids.
"""

from typing import List

from licenses.application.dto.license_dto import LicenseKeyDTO
from licenses.application.queries.list_keys import ListAllKeysQuery, ListResellerKeysQuery
from licenses.ports.license_key_repository import LicenseKeyRepository
from resellers.ports.reseller_repository import ResellerRepository


class ListResellerKeysHandler:
    """Handler for ListResellerKeysQuery."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        reseller_repository: ResellerRepository,
    ):
        """Initialize handler with repositories."""
        self.license_key_repository = license_key_repository
        self.reseller_repository = reseller_repository

    async def handle(self, query: ListResellerKeysQuery) -> List[LicenseKeyDTO]:
        """
        Handle list reseller keys query.

        Args:
            query: ListResellerKeysQuery

        Returns:
            List of LicenseKeyDTO, newest first
        """
        keys = await self.license_key_repository.list_by_reseller(query.reseller_id)
        usernames = await self.reseller_repository.find_usernames([query.reseller_id])
        return [LicenseKeyDTO.from_entity(k, usernames) for k in keys]


class ListAllKeysHandler:
    """Handler for ListAllKeysQuery."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        reseller_repository: ResellerRepository,
    ):
        """Initialize handler with repositories."""
        self.license_key_repository = license_key_repository
        self.reseller_repository = reseller_repository

    async def handle(self, query: ListAllKeysQuery) -> List[LicenseKeyDTO]:
        keys = await self.license_key_repository.list_all()
        usernames = await self.reseller_repository.find_usernames(
            [k.reseller_id for k in keys if k.reseller_id is not None]
        )
        return [LicenseKeyDTO.from_entity(k, usernames) for k in keys]
