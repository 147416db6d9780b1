"""
ListKeyDevicesHandler.
"""

from typing import List

from activations.application.dto.activation_dto import DeviceRegistrationDTO
from activations.application.queries.list_key_devices import ListKeyDevicesQuery
from activations.ports.device_registration_repository import (
    DeviceRegistrationRepository,
)
from core.domain.exceptions import LicenseKeyNotFoundError
from licenses.domain.services import KeyOwnership
from licenses.ports.license_key_repository import LicenseKeyRepository


class ListKeyDevicesHandler:
    """Handler for ListKeyDevicesQuery."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        registration_repository: DeviceRegistrationRepository,
    ):
        """Initialize handler with repositories."""
        self.license_key_repository = license_key_repository
        self.registration_repository = registration_repository

    async def handle(self, query: ListKeyDevicesQuery) -> List[DeviceRegistrationDTO]:
        """
        List the devices bound to a key the caller owns.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
            KeyOwnershipError: If the caller does not own the key
        """
        license_key = await self.license_key_repository.find_by_id(query.key_id)
        if not license_key:
            raise LicenseKeyNotFoundError()
        KeyOwnership.ensure_owned(license_key, query.reseller_id)

        registrations = await self.registration_repository.list_by_key(license_key.id)
        return [DeviceRegistrationDTO.from_entity(r) for r in registrations]
