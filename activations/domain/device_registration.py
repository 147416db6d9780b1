"""
DeviceRegistration domain entity.

Records that a device consumed one slot of a key's device limit.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.clock import utc_now
from core.domain.value_objects import DeviceIdentifier


@dataclass(frozen=True)
class DeviceRegistration:
    """
    DeviceRegistration domain entity.

    At most one registration exists per (key_id, device_id) pair.
    """

    id: Optional[int]
    key_id: int
    device_id: DeviceIdentifier
    registered_at: datetime

    def __post_init__(self):
        """Validate registration entity."""
        if not self.key_id:
            raise ValueError("Key ID is required")

    @classmethod
    def create(
        cls,
        key_id: int,
        device_id: str,
        registered_at: Optional[datetime] = None,
    ) -> "DeviceRegistration":
        """
        Create a new DeviceRegistration entity.

        Args:
            key_id: License key id
            device_id: Client device identifier
            registered_at: Binding time (defaults to now)

        Returns:
            DeviceRegistration entity instance without an id
        """
        return cls(
            id=None,
            key_id=key_id,
            device_id=DeviceIdentifier(device_id),
            registered_at=registered_at or utc_now(),
        )
