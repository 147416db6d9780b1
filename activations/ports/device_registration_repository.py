"""
DeviceRegistration repository port (interface).

This defines the contract for the device-binding ledger.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Tuple

from activations.domain.device_registration import DeviceRegistration
from licenses.domain.license_key import LicenseKey


class DeviceRegistrationRepository(ABC):
    """
    Abstract repository for DeviceRegistration entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def list_by_key(self, key_id: int) -> List[DeviceRegistration]:
        """
        List registrations of a key, oldest first.

        Args:
            key_id: License key id

        Returns:
            List of DeviceRegistration entities
        """
        pass

    @abstractmethod
    async def bind_device(
        self, license_key: LicenseKey, device_id: str, registered_at: datetime
    ) -> Tuple[DeviceRegistration, bool]:
        """
        Bind a device to a key, atomically.

        The count-and-insert is one unit: concurrent binds of distinct
        devices never push the number of registrations past the key's
        device limit.

        Args:
            license_key: Key to bind to
            device_id: Device identifier
            registered_at: Binding time for a new registration

        Returns:
            Tuple of (registration, created). ``created`` is False when the
            device was already bound.

        Raises:
            DeviceLimitReachedError: If every slot is taken
        """
        pass
