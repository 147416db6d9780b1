"""
Django implementation of DeviceRegistrationRepository port.

This adapter converts between domain entities and Django ORM models.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import F

from activations.domain.device_registration import DeviceRegistration
from activations.infrastructure.models import (
    DeviceRegistration as DeviceRegistrationModel,
)
from activations.ports.device_registration_repository import (
    DeviceRegistrationRepository,
)
from core.domain.exceptions import DeviceLimitReachedError
from core.domain.value_objects import DeviceIdentifier
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.models import LicenseKey as LicenseKeyModel


class DjangoDeviceRegistrationRepository(DeviceRegistrationRepository):
    """
    Django ORM implementation of DeviceRegistrationRepository.

    Slots are claimed on the key row with a conditional UPDATE
    (bound_devices < device_limit). The unique (key, device) constraint
    catches two requests binding the same new device at once.
    """

    def _to_domain(self, model: DeviceRegistrationModel) -> DeviceRegistration:
        """
        Convert Django model to domain entity.

        Args:
            model: Django DeviceRegistration model

        Returns:
            DeviceRegistration domain entity
        """
        return DeviceRegistration(
            id=model.id,
            key_id=model.license_key_id,
            device_id=DeviceIdentifier(model.device_id),
            registered_at=model.registered_at,
        )

    def _find(self, key_id: int, device_id: str) -> Optional[DeviceRegistrationModel]:
        return DeviceRegistrationModel.objects.filter(
            license_key_id=key_id, device_id=device_id
        ).first()

    @sync_to_async
    def list_by_key(self, key_id: int) -> List[DeviceRegistration]:
        models = DeviceRegistrationModel.objects.filter(license_key_id=key_id).order_by(
            "registered_at", "id"
        )
        return [self._to_domain(m) for m in models]

    @sync_to_async
    def bind_device(
        self, license_key: LicenseKey, device_id: str, registered_at: datetime
    ) -> Tuple[DeviceRegistration, bool]:
        """
        Bind a device, claiming a slot on the key row.

        Args:
            license_key: Key to bind to
            device_id: Device identifier
            registered_at: Binding time

        Returns:
            Tuple of (registration, created)

        Raises:
            DeviceLimitReachedError: If every slot is taken
        """
        existing = self._find(license_key.id, device_id)
        if existing:
            return self._to_domain(existing), False

        try:
            with transaction.atomic():
                claimed = LicenseKeyModel.objects.filter(
                    id=license_key.id, bound_devices__lt=F("device_limit")
                ).update(bound_devices=F("bound_devices") + 1)
                if not claimed:
                    # The device may have been bound by a concurrent request.
                    existing = self._find(license_key.id, device_id)
                    if existing:
                        return self._to_domain(existing), False
                    raise DeviceLimitReachedError(license_key.device_limit)

                model = DeviceRegistrationModel.objects.create(
                    license_key_id=license_key.id,
                    device_id=device_id,
                    registered_at=registered_at,
                )
        except IntegrityError:
            # Same device bound concurrently; the slot claim was rolled back.
            existing = self._find(license_key.id, device_id)
            if existing is None:
                raise
            return self._to_domain(existing), False

        return self._to_domain(model), True
