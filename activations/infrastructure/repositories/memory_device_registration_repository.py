"""
In-memory implementation of DeviceRegistrationRepository port.
"""

from dataclasses import replace
from datetime import datetime
from typing import List, Tuple

from activations.domain.device_registration import DeviceRegistration
from activations.ports.device_registration_repository import (
    DeviceRegistrationRepository,
)
from core.domain.exceptions import DeviceLimitReachedError
from core.infrastructure.memory import InMemoryStore
from licenses.domain.license_key import LicenseKey


class InMemoryDeviceRegistrationRepository(DeviceRegistrationRepository):
    """DeviceRegistrationRepository backed by an InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def list_by_key(self, key_id: int) -> List[DeviceRegistration]:
        with self.store.lock:
            registrations = list(self.store.registrations.get(key_id, {}).values())
        return sorted(registrations, key=lambda r: (r.registered_at, r.id))

    async def bind_device(
        self, license_key: LicenseKey, device_id: str, registered_at: datetime
    ) -> Tuple[DeviceRegistration, bool]:
        with self.store.lock:
            bound = self.store.registrations.setdefault(license_key.id, {})
            if device_id in bound:
                return bound[device_id], False
            if len(bound) >= license_key.device_limit:
                raise DeviceLimitReachedError(license_key.device_limit)

            registration = replace(
                DeviceRegistration.create(license_key.id, device_id, registered_at),
                id=self.store.next_id("device_registrations"),
            )
            bound[device_id] = registration
            return registration, True
