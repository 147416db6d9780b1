"""
Integration tests for authentication and registration endpoints.
"""

import pytest
from django.contrib.auth import get_user_model

from resellers.infrastructure.models import ReferralToken as ReferralTokenModel
from resellers.infrastructure.models import Reseller as ResellerModel


@pytest.mark.django_db
@pytest.mark.integration
class TestLoginAPI:
    """Tests for admin and reseller login."""

    def test_admin_login(self, api_client, admin_user):
        response = api_client.post(
            "/api/v1/admin/login", {"username": "admin", "password": "secret123"}, format="json"
        )

        assert response.status_code == 200
        assert response.data["message"] == "Login successful"
        assert response.data["user"]["role"] == "admin"
        assert response.data["user"]["username"] == "admin"

    def test_admin_login_non_staff(self, api_client, db):
        """Regular users cannot log into the admin API."""
        get_user_model().objects.create_user(username="plain", password="secret123")

        response = api_client.post(
            "/api/v1/admin/login", {"username": "plain", "password": "secret123"}, format="json"
        )

        assert response.status_code == 401
        assert response.data["error"]["code"] == "INVALID_CREDENTIALS"

    def test_reseller_login(self, api_client, reseller_model):
        response = api_client.post(
            "/api/v1/reseller/login",
            {"username": "reseller1", "password": "secret123"},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["user"]["role"] == "reseller"
        assert response.data["user"]["id"] == reseller_model.id
        assert response.data["user"]["credits"] == 3

    def test_reseller_login_wrong_password(self, api_client, reseller_model):
        response = api_client.post(
            "/api/v1/reseller/login",
            {"username": "reseller1", "password": "wrong-one"},
            format="json",
        )

        assert response.status_code == 401
        assert response.data["error"]["message"] == "Invalid credentials"

    def test_login_missing_fields(self, api_client, db):
        response = api_client.post("/api/v1/reseller/login", {}, format="json")

        assert response.status_code == 400
        assert response.data["error"]["code"] == "VALIDATION_ERROR"

    def test_me_and_logout(self, reseller_client):
        me = reseller_client.get("/api/v1/me")
        assert me.status_code == 200
        assert me.data["user"]["username"] == "reseller1"

        logout = reseller_client.post("/api/v1/logout")
        assert logout.status_code == 200

        assert reseller_client.get("/api/v1/me").status_code == 401
        assert reseller_client.get("/api/v1/reseller/credits").status_code == 401


@pytest.mark.django_db
@pytest.mark.integration
class TestRegisterAPI:
    """Tests for reseller registration."""

    def _token(self, admin_client):
        response = admin_client.post("/api/v1/admin/referral-tokens", format="json")
        assert response.status_code == 201
        return response.data["token"]["token"]

    def test_register_with_token(self, api_client, admin_client):
        token = self._token(admin_client)

        response = api_client.post(
            "/api/v1/reseller/register",
            {"username": "newbie", "password": "secret123", "referralToken": token},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["message"] == "Registration successful"
        assert response.data["reseller"]["username"] == "newbie"
        assert response.data["reseller"]["credits"] == 0
        stored = ReferralTokenModel.objects.get(token=token)
        assert stored.used is True
        assert stored.used_by == "newbie"

    def test_register_reused_token(self, api_client, admin_client):
        token = self._token(admin_client)
        payload = {"username": "first", "password": "secret123", "referralToken": token}
        assert api_client.post("/api/v1/reseller/register", payload, format="json").status_code == 201

        payload["username"] = "second"
        response = api_client.post("/api/v1/reseller/register", payload, format="json")

        assert response.status_code == 409
        assert response.data["error"]["code"] == "INVALID_REFERRAL_TOKEN"
        assert not ResellerModel.objects.filter(username="second").exists()

    def test_register_username_taken(self, api_client, admin_client, reseller_model):
        token = self._token(admin_client)

        response = api_client.post(
            "/api/v1/reseller/register",
            {"username": "reseller1", "password": "secret123", "referralToken": token},
            format="json",
        )

        assert response.status_code == 409
        assert response.data["error"]["code"] == "USERNAME_TAKEN"
        assert ReferralTokenModel.objects.get(token=token).used is False

    def test_register_short_password(self, api_client, db):
        response = api_client.post(
            "/api/v1/reseller/register",
            {"username": "newbie", "password": "123", "referralToken": "X-R-T0K3N-ABC"},
            format="json",
        )

        assert response.status_code == 400
        assert "password" in response.data["error"]["message"]
