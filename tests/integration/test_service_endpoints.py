"""
Integration tests for health, metrics and the test data command.
"""

from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from licenses.infrastructure.models import LicenseKey as LicenseKeyModel
from resellers.infrastructure.models import ReferralToken as ReferralTokenModel
from resellers.infrastructure.models import Reseller as ResellerModel


@pytest.mark.django_db
@pytest.mark.integration
class TestServiceEndpoints:
    """Tests for health and metrics endpoints."""

    def test_health(self, api_client):
        response = api_client.get("/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health_db(self, api_client):
        response = api_client.get("/health/db/")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_metrics_exposes_counters(self, api_client):
        api_client.get("/api/v1/verify", {"key": "NOPE-NOPE", "deviceId": "d1"})

        response = api_client.get("/metrics")

        assert response.status_code == 200
        assert b"key_verifications_total" in response.content


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateTestDataCommand:
    """Tests for the create_test_data management command."""

    def test_creates_admin_reseller_and_key(self):
        out = StringIO()

        call_command("create_test_data", "--credits", "3", stdout=out)

        assert get_user_model().objects.get(username="admin").is_staff
        reseller = ResellerModel.objects.get(username="reseller")
        assert reseller.credits == 2
        assert ReferralTokenModel.objects.get(used_by="reseller").used is True
        assert LicenseKeyModel.objects.filter(reseller=reseller).count() == 1
        assert "Test license key:" in out.getvalue()

    def test_rerun_is_idempotent(self):
        call_command("create_test_data", "--skip-key", stdout=StringIO())
        out = StringIO()

        call_command("create_test_data", "--skip-key", stdout=out)

        assert ResellerModel.objects.count() == 1
        assert "already exists" in out.getvalue()
