"""
Unit tests for revoke and reset key handlers.
"""

from datetime import timedelta

import pytest

from core.domain.exceptions import (
    KeyOwnershipError,
    KeyRevokedError,
    LicenseKeyNotFoundError,
)
from licenses.application.commands.reset_key import ResetKeyCommand
from licenses.application.commands.revoke_key import RevokeKeyCommand
from licenses.application.handlers.key_lifecycle_handlers import (
    ResetKeyHandler,
    RevokeKeyHandler,
)


@pytest.fixture
def revoke_handler(license_key_repository, reseller_repository):
    return RevokeKeyHandler(license_key_repository, reseller_repository)


@pytest.fixture
def reset_handler(license_key_repository, reseller_repository, clock):
    return ResetKeyHandler(license_key_repository, reseller_repository, clock=clock)


@pytest.mark.unit
@pytest.mark.asyncio
class TestRevokeKeyHandler:
    """Tests for RevokeKeyHandler."""

    async def test_revoke_own_key(self, revoke_handler, license_key_repository, reseller, make_key):
        key = make_key(reseller.id)

        dto = await revoke_handler.handle(RevokeKeyCommand(key_id=key.id, reseller_id=reseller.id))

        assert dto.is_active is False
        stored = await license_key_repository.find_by_id(key.id)
        assert stored.is_active is False

    async def test_revoke_twice_succeeds(self, revoke_handler, reseller, make_key):
        key = make_key(reseller.id)
        command = RevokeKeyCommand(key_id=key.id, reseller_id=reseller.id)

        await revoke_handler.handle(command)
        dto = await revoke_handler.handle(command)

        assert dto.is_active is False

    async def test_revoke_other_resellers_key(
        self, revoke_handler, license_key_repository, reseller, make_reseller, make_key
    ):
        """Resellers can only revoke keys they own."""
        other = make_reseller(username="other")
        key = make_key(other.id)

        with pytest.raises(KeyOwnershipError):
            await revoke_handler.handle(RevokeKeyCommand(key_id=key.id, reseller_id=reseller.id))

        stored = await license_key_repository.find_by_id(key.id)
        assert stored.is_active is True

    async def test_revoke_unknown_key(self, revoke_handler, reseller):
        with pytest.raises(LicenseKeyNotFoundError):
            await revoke_handler.handle(RevokeKeyCommand(key_id=999, reseller_id=reseller.id))


@pytest.mark.unit
@pytest.mark.asyncio
class TestResetKeyHandler:
    """Tests for ResetKeyHandler."""

    async def test_reset_clears_devices_and_restarts_validity(
        self,
        reset_handler,
        registration_repository,
        reseller_repository,
        reseller,
        make_key,
        clock,
    ):
        """Reset drops every binding and renews expiry without charging."""
        key = make_key(reseller.id, device_limit=2, expiry_days=10)
        await registration_repository.bind_device(key, "device-a", clock.now)
        await registration_repository.bind_device(key, "device-b", clock.now)
        clock.advance(days=20)

        dto = await reset_handler.handle(ResetKeyCommand(key_id=key.id, reseller_id=reseller.id))

        assert dto.expires_at == clock.now + timedelta(days=10)
        assert dto.is_active is True
        assert len(await registration_repository.list_by_key(key.id)) == 0
        assert (await reseller_repository.find_by_id(reseller.id)).credits == 0

    async def test_reset_revoked_key(
        self, reset_handler, license_key_repository, reseller, make_key
    ):
        key = make_key(reseller.id)
        await license_key_repository.deactivate(key.id)

        with pytest.raises(KeyRevokedError):
            await reset_handler.handle(ResetKeyCommand(key_id=key.id, reseller_id=reseller.id))

    async def test_reset_other_resellers_key(
        self, reset_handler, reseller, make_reseller, make_key
    ):
        other = make_reseller(username="other")
        key = make_key(other.id)

        with pytest.raises(KeyOwnershipError):
            await reset_handler.handle(ResetKeyCommand(key_id=key.id, reseller_id=reseller.id))

    async def test_reset_unknown_key(self, reset_handler, reseller):
        with pytest.raises(LicenseKeyNotFoundError):
            await reset_handler.handle(ResetKeyCommand(key_id=12, reseller_id=reseller.id))
