"""
Integration tests for the public verification endpoint.
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from django.utils import timezone

from licenses.infrastructure.models import LicenseKey as LicenseKeyModel


@pytest.mark.django_db
@pytest.mark.integration
class TestVerifyAPI:
    """Tests for GET and POST /api/v1/verify."""

    def test_first_device_registers(self, api_client, issue_key):
        key = issue_key()

        response = api_client.get("/api/v1/verify", {"key": key["key"], "deviceId": "d1"})

        assert response.status_code == 200
        assert response.data["success"] is True
        assert response.data["message"] == "Key validated and device registered"
        assert response.data["game"] == "Free Fire"
        assert response.data["expiresAt"] == key["expiresAt"]

    def test_known_device_post(self, api_client, issue_key):
        key = issue_key()
        api_client.post("/api/v1/verify", {"key": key["key"], "deviceId": "d1"}, format="json")

        response = api_client.post(
            "/api/v1/verify", {"key": key["key"], "deviceId": "d1"}, format="json"
        )

        assert response.status_code == 200
        assert response.data["message"] == "Key validated successfully"

    def test_no_session_needed(self, api_client, issue_key):
        """Verification works without any operator session."""
        key = issue_key()
        api_client.logout()

        response = api_client.get("/api/v1/verify", {"key": key["key"], "deviceId": "d1"})

        assert response.status_code == 200

    def test_device_limit_reached(self, api_client, issue_key):
        key = issue_key(deviceLimit=1)
        api_client.get("/api/v1/verify", {"key": key["key"], "deviceId": "d1"})

        response = api_client.get("/api/v1/verify", {"key": key["key"], "deviceId": "d2"})

        assert response.status_code == 403
        assert response.data == {
            "success": False,
            "message": "Device limit reached (1)",
            "reason": "device_limit_reached",
        }

    def test_unknown_key(self, api_client, db):
        response = api_client.get(
            "/api/v1/verify", {"key": "FREEFIRE-000000-000000", "deviceId": "d1"}
        )

        assert response.status_code == 404
        assert response.data["reason"] == "invalid_key"
        assert response.data["message"] == "Invalid key"

    def test_expired_key(self, api_client, issue_key):
        key = issue_key()
        now = timezone.now()
        LicenseKeyModel.objects.filter(id=key["id"]).update(
            created_at=now - timedelta(days=31),
            expires_at=now - timedelta(days=1),
        )

        response = api_client.get("/api/v1/verify", {"key": key["key"], "deviceId": "d1"})

        assert response.status_code == 403
        assert response.data == {
            "success": False,
            "message": "Key has expired",
            "reason": "expired",
        }

    def test_key_expired_by_hand(self, api_client, admin_client, issue_key):
        """Moving expires_at before created_at expires the key without breaking reads."""
        key = issue_key()
        LicenseKeyModel.objects.filter(id=key["id"]).update(
            expires_at=timezone.now() - timedelta(seconds=1)
        )

        response = api_client.get("/api/v1/verify", {"key": key["key"], "deviceId": "d1"})

        assert response.status_code == 403
        assert response.data["reason"] == "expired"
        assert admin_client.get("/api/v1/admin/keys").status_code == 200

    @pytest.mark.parametrize("params", [{}, {"key": "FREEFIRE-1"}, {"deviceId": "d1"}])
    def test_missing_input(self, api_client, db, params):
        response = api_client.get("/api/v1/verify", params)

        assert response.status_code == 400
        assert response.data == {
            "success": False,
            "message": "Key and deviceId are required",
            "reason": "invalid_input",
        }

    @pytest.mark.parametrize(
        "body, content_type",
        [
            ("{not json", "application/json"),
            ("key=FREEFIRE-1&deviceId=d1", "text/plain"),
        ],
    )
    def test_unreadable_body(self, api_client, db, body, content_type):
        response = api_client.generic(
            "POST", "/api/v1/verify", body, content_type=content_type
        )

        assert response.status_code == 400
        assert response.data == {
            "success": False,
            "message": "Key and deviceId are required",
            "reason": "invalid_input",
        }

    def test_unexpected_error(self, api_client, db):
        with patch(
            "activations.application.handlers.verify_key_handler.VerificationEngine.verify",
            side_effect=RuntimeError("boom"),
        ):
            response = api_client.get("/api/v1/verify", {"key": "ANY-KEY", "deviceId": "d1"})

        assert response.status_code == 500
        assert response.data == {
            "success": False,
            "message": "An error occurred during verification",
        }
