"""
Fixtures for API tests: stored operators and logged-in clients.
"""

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from resellers.domain.reseller import Reseller
from resellers.infrastructure.models import Reseller as ResellerModel

PASSWORD = "secret123"


@pytest.fixture
def admin_user(db):
    """Fixture for a staff user."""
    return get_user_model().objects.create_user(
        username="admin", password=PASSWORD, is_staff=True
    )


@pytest.fixture
def reseller_model(db):
    """Fixture for a stored reseller holding 3 credits."""
    entity = Reseller.create(username="reseller1", password=PASSWORD)
    return ResellerModel.objects.create(
        username="reseller1", password=entity.password_hash, credits=3
    )


@pytest.fixture
def admin_client(admin_user):
    """Fixture for a client holding an admin session."""
    client = APIClient()
    response = client.post(
        "/api/v1/admin/login", {"username": "admin", "password": PASSWORD}, format="json"
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def reseller_client(reseller_model):
    """Fixture for a client holding a reseller session."""
    client = APIClient()
    response = client.post(
        "/api/v1/reseller/login", {"username": "reseller1", "password": PASSWORD}, format="json"
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def issue_key(reseller_client):
    """Factory fixture issuing keys through the reseller API."""

    def issue(**overrides):
        payload = {"game": "Free Fire", "deviceLimit": 1, "expiryDays": 30}
        payload.update(overrides)
        response = reseller_client.post("/api/v1/reseller/keys", payload, format="json")
        assert response.status_code == 201, response.data
        return response.data["key"]

    return issue
