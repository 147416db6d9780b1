"""
Device binding DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass
class DeviceRegistrationDTO:
    """DTO for a device bound to a key."""

    id: int
    key_id: int
    device_id: str
    registered_at: datetime

    @classmethod
    def from_entity(cls, registration) -> "DeviceRegistrationDTO":
        return cls(
            id=registration.id,
            key_id=registration.key_id,
            device_id=str(registration.device_id),
            registered_at=registration.registered_at,
        )
