"""
Pytest configuration and shared fixtures.

Unit tests run handlers against in-memory repositories sharing one
InMemoryStore. Integration tests use the Django repositories and call
them through async_to_sync so that ORM work stays on the test thread
(and inside the test transaction).
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from activations.infrastructure.repositories.django_device_registration_repository import (
    DjangoDeviceRegistrationRepository,
)
from activations.infrastructure.repositories.memory_device_registration_repository import (
    InMemoryDeviceRegistrationRepository,
)
from core.infrastructure.memory import InMemoryStore
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from licenses.infrastructure.repositories.memory_license_key_repository import (
    InMemoryLicenseKeyRepository,
)
from resellers.domain.referral_token import ReferralToken
from resellers.domain.reseller import Reseller
from resellers.infrastructure.repositories.django_referral_token_repository import (
    DjangoReferralTokenRepository,
)
from resellers.infrastructure.repositories.django_reseller_repository import (
    DjangoResellerRepository,
)
from resellers.infrastructure.repositories.memory_referral_token_repository import (
    InMemoryReferralTokenRepository,
)
from resellers.infrastructure.repositories.memory_reseller_repository import (
    InMemoryResellerRepository,
)

START = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    """Fixture for a controllable clock starting at START."""
    return FakeClock()


# In-memory repositories


@pytest.fixture
def store():
    """Fixture for a fresh in-memory store."""
    return InMemoryStore()


@pytest.fixture
def reseller_repository(store):
    """Fixture for ResellerRepository."""
    return InMemoryResellerRepository(store)


@pytest.fixture
def referral_token_repository(store):
    """Fixture for ReferralTokenRepository."""
    return InMemoryReferralTokenRepository(store)


@pytest.fixture
def license_key_repository(store):
    """Fixture for LicenseKeyRepository."""
    return InMemoryLicenseKeyRepository(store)


@pytest.fixture
def registration_repository(store):
    """Fixture for DeviceRegistrationRepository."""
    return InMemoryDeviceRegistrationRepository(store)


def put_reseller(store, username="reseller1", credits=0, password="secret123"):
    """Insert a reseller straight into the store."""
    reseller = replace(
        Reseller.create(username=username, password=password, created_at=START),
        id=store.next_id("resellers"),
        credits=credits,
    )
    store.resellers[reseller.id] = reseller
    return reseller


def put_key(store, reseller_id, device_limit=1, expiry_days=30, key=None, created_at=START):
    """Insert an active key straight into the store."""
    license_key = replace(
        LicenseKey.create(
            game="Free Fire",
            device_limit=device_limit,
            expiry_days=expiry_days,
            reseller_id=reseller_id,
            key=key,
            created_at=created_at,
        ),
        id=store.next_id("license_keys"),
    )
    store.license_keys[license_key.id] = license_key
    return license_key


def put_referral_token(store, created_by="admin"):
    """Insert an unused referral token straight into the store."""
    token = replace(
        ReferralToken.create(created_by=created_by, prefix="X-R-T0K3N-", created_at=START),
        id=store.next_id("referral_tokens"),
    )
    store.referral_tokens[token.token] = token
    return token


@pytest.fixture
def make_reseller(store):
    """Factory fixture inserting resellers into the store."""

    def factory(**kwargs):
        return put_reseller(store, **kwargs)

    return factory


@pytest.fixture
def make_key(store):
    """Factory fixture inserting active keys into the store."""

    def factory(reseller_id, **kwargs):
        return put_key(store, reseller_id, **kwargs)

    return factory


@pytest.fixture
def reseller(store):
    """Fixture for a reseller with no credits."""
    return put_reseller(store)


@pytest.fixture
def funded_reseller(store):
    """Fixture for a reseller holding 5 credits."""
    return put_reseller(store, username="funded", credits=5)


@pytest.fixture
def referral_token(store):
    """Fixture for an unused referral token."""
    return put_referral_token(store)


# Django repositories


@pytest.fixture
def django_reseller_repository():
    """Fixture for the Django ResellerRepository."""
    return DjangoResellerRepository()


@pytest.fixture
def django_referral_token_repository():
    """Fixture for the Django ReferralTokenRepository."""
    return DjangoReferralTokenRepository()


@pytest.fixture
def django_license_key_repository():
    """Fixture for the Django LicenseKeyRepository."""
    return DjangoLicenseKeyRepository()


@pytest.fixture
def django_registration_repository():
    """Fixture for the Django DeviceRegistrationRepository."""
    return DjangoDeviceRegistrationRepository()


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
