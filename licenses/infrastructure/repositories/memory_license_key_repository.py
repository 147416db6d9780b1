"""
In-memory implementation of LicenseKeyRepository port.
"""
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Tuple

from core.domain.exceptions import (
    DuplicateKeyError,
    InsufficientCreditsError,
    KeyRevokedError,
    ResellerNotFoundError,
)
from core.infrastructure.memory import InMemoryStore
from licenses.domain.license_key import LicenseKey
from licenses.ports.license_key_repository import LicenseKeyRepository


class InMemoryLicenseKeyRepository(LicenseKeyRepository):
    """LicenseKeyRepository backed by an InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def _insert(self, license_key: LicenseKey) -> LicenseKey:
        if self.store.key_id_for(license_key.key) is not None:
            raise DuplicateKeyError()
        saved = replace(license_key, id=self.store.next_id("license_keys"))
        self.store.license_keys[saved.id] = saved
        return saved

    @staticmethod
    def _newest_first(keys: List[LicenseKey]) -> List[LicenseKey]:
        return sorted(keys, key=lambda k: (k.created_at, k.id), reverse=True)

    async def create(self, license_key: LicenseKey) -> LicenseKey:
        with self.store.lock:
            return self._insert(license_key)

    async def create_with_debit(
        self, license_key: LicenseKey, cost: int
    ) -> Tuple[LicenseKey, int]:
        with self.store.lock:
            reseller = self.store.resellers.get(license_key.reseller_id)
            if reseller is None:
                raise ResellerNotFoundError(
                    f"Reseller {license_key.reseller_id} not found"
                )
            if not reseller.can_afford(cost):
                raise InsufficientCreditsError()
            # Insert first: a duplicate leaves the balance untouched.
            saved = self._insert(license_key)
            remaining = reseller.credits - cost
            self.store.resellers[reseller.id] = reseller.with_credits(remaining)
            return saved, remaining

    async def find_by_id(self, key_id: int) -> Optional[LicenseKey]:
        with self.store.lock:
            return self.store.license_keys.get(key_id)

    async def find_by_key(self, key: str) -> Optional[LicenseKey]:
        with self.store.lock:
            key_id = self.store.key_id_for(key)
            return self.store.license_keys.get(key_id) if key_id is not None else None

    async def list_by_reseller(self, reseller_id: int) -> List[LicenseKey]:
        with self.store.lock:
            keys = [k for k in self.store.license_keys.values() if k.reseller_id == reseller_id]
        return self._newest_first(keys)

    async def list_all(self) -> List[LicenseKey]:
        with self.store.lock:
            keys = list(self.store.license_keys.values())
        return self._newest_first(keys)

    async def deactivate(self, key_id: int) -> Optional[LicenseKey]:
        with self.store.lock:
            key = self.store.license_keys.get(key_id)
            if key is None:
                return None
            updated = key.deactivate()
            self.store.license_keys[key_id] = updated
            return updated

    async def reset(self, key_id: int, expires_at: datetime) -> Optional[LicenseKey]:
        with self.store.lock:
            key = self.store.license_keys.get(key_id)
            if key is None:
                return None
            if not key.is_active:
                raise KeyRevokedError("Cannot reset a revoked key")
            self.store.registrations.pop(key_id, None)
            updated = replace(key, expires_at=expires_at)
            self.store.license_keys[key_id] = updated
            return updated
