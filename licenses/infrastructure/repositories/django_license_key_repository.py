"""
Django implementation of LicenseKeyRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import F

from activations.infrastructure.models import (
    DeviceRegistration as DeviceRegistrationModel,
)
from core.domain.exceptions import (
    DuplicateKeyError,
    InsufficientCreditsError,
    KeyRevokedError,
    ResellerNotFoundError,
)
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.models import (
    LicenseKey as LicenseKeyModel,
)
from licenses.ports.license_key_repository import LicenseKeyRepository
from resellers.infrastructure.models import Reseller as ResellerModel


class DjangoLicenseKeyRepository(LicenseKeyRepository):
    """
    Django ORM implementation of LicenseKeyRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Runs every read-decide-write inside one transaction
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseKeyModel) -> LicenseKey:
        """
        Convert Django model to domain entity.

        Args:
            model: Django LicenseKey model

        Returns:
            LicenseKey domain entity
        """
        return LicenseKey(
            id=model.id,
            key=model.key,
            game=model.game,
            device_limit=model.device_limit,
            expiry_days=model.expiry_days,
            reseller_id=model.reseller_id,
            created_at=model.created_at,
            expires_at=model.expires_at,
            is_active=model.is_active,
        )

    def _insert(self, license_key: LicenseKey) -> LicenseKeyModel:
        """Insert a new row; a unique violation becomes DuplicateKeyError."""
        if LicenseKeyModel.objects.filter(key=license_key.key).exists():
            raise DuplicateKeyError()
        try:
            with transaction.atomic():
                return LicenseKeyModel.objects.create(
                    key=license_key.key,
                    game=license_key.game,
                    device_limit=license_key.device_limit,
                    expiry_days=license_key.expiry_days,
                    reseller_id=license_key.reseller_id,
                    created_at=license_key.created_at,
                    expires_at=license_key.expires_at,
                    is_active=license_key.is_active,
                )
        except IntegrityError as exc:
            raise DuplicateKeyError() from exc

    @sync_to_async
    def create(self, license_key: LicenseKey) -> LicenseKey:
        with transaction.atomic():
            model = self._insert(license_key)
        return self._to_domain(model)

    @sync_to_async
    def create_with_debit(
        self, license_key: LicenseKey, cost: int
    ) -> Tuple[LicenseKey, int]:
        """
        Debit and insert in one transaction.

        The debit is a conditional UPDATE (credits >= cost), so a balance
        can never go negative even under concurrent issuance. Any failure
        after the debit rolls it back with the transaction.
        """
        reseller_id = license_key.reseller_id
        with transaction.atomic():
            if not ResellerModel.objects.filter(id=reseller_id).exists():
                raise ResellerNotFoundError(f"Reseller {reseller_id} not found")

            debited = ResellerModel.objects.filter(
                id=reseller_id, credits__gte=cost
            ).update(credits=F("credits") - cost)
            if not debited:
                raise InsufficientCreditsError()

            model = self._insert(license_key)
            remaining = ResellerModel.objects.values_list("credits", flat=True).get(
                id=reseller_id
            )
        return self._to_domain(model), remaining

    @sync_to_async
    def find_by_id(self, key_id: int) -> Optional[LicenseKey]:
        try:
            model = LicenseKeyModel.objects.get(id=key_id)
            return self._to_domain(model)
        except LicenseKeyModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_key(self, key: str) -> Optional[LicenseKey]:
        """
        Find a license key by key string.

        Args:
            key: License key string

        Returns:
            LicenseKey entity or None if not found
        """
        try:
            model = LicenseKeyModel.objects.get(key=key)
            return self._to_domain(model)
        except LicenseKeyModel.DoesNotExist:
            return None

    @sync_to_async
    def list_by_reseller(self, reseller_id: int) -> List[LicenseKey]:
        models = LicenseKeyModel.objects.filter(reseller_id=reseller_id).order_by(
            "-created_at", "-id"
        )
        return [self._to_domain(m) for m in models]

    @sync_to_async
    def list_all(self) -> List[LicenseKey]:
        models = LicenseKeyModel.objects.order_by("-created_at", "-id")
        return [self._to_domain(m) for m in models]

    @sync_to_async
    def deactivate(self, key_id: int) -> Optional[LicenseKey]:
        with transaction.atomic():
            updated = LicenseKeyModel.objects.filter(id=key_id).update(is_active=False)
            if not updated:
                return None
            model = LicenseKeyModel.objects.get(id=key_id)
        return self._to_domain(model)

    @sync_to_async
    def reset(self, key_id: int, expires_at: datetime) -> Optional[LicenseKey]:
        with transaction.atomic():
            try:
                model = LicenseKeyModel.objects.select_for_update().get(id=key_id)
            except LicenseKeyModel.DoesNotExist:
                return None
            if not model.is_active:
                raise KeyRevokedError("Cannot reset a revoked key")

            DeviceRegistrationModel.objects.filter(license_key_id=key_id).delete()
            model.bound_devices = 0
            model.expires_at = expires_at
            model.save(update_fields=["bound_devices", "expires_at"])
        return self._to_domain(model)
