"""
Integration tests for admin API endpoints.
"""

import pytest

from licenses.infrastructure.models import LicenseKey as LicenseKeyModel
from resellers.infrastructure.models import Reseller as ResellerModel


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminAccessAPI:
    """Role checks on the admin API."""

    def test_requires_session(self, api_client, db):
        response = api_client.get("/api/v1/admin/resellers")

        assert response.status_code == 401

    def test_reseller_cannot_use_admin_api(self, reseller_client):
        response = reseller_client.get("/api/v1/admin/resellers")

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Admin access required"


@pytest.mark.django_db
@pytest.mark.integration
class TestResellerAdministrationAPI:
    """Tests for reseller administration."""

    def test_list_resellers(self, admin_client, reseller_model):
        response = admin_client.get("/api/v1/admin/resellers")

        assert response.status_code == 200
        assert response.data["resellers"] == [
            {
                "id": reseller_model.id,
                "username": "reseller1",
                "credits": 3,
                "createdAt": response.data["resellers"][0]["createdAt"],
            }
        ]
        assert "password" not in response.data["resellers"][0]

    def test_add_credits(self, admin_client, reseller_model):
        response = admin_client.post(
            f"/api/v1/admin/resellers/{reseller_model.id}/credits", {"credits": 10}, format="json"
        )

        assert response.status_code == 200
        assert response.data["reseller"]["credits"] == 13
        reseller_model.refresh_from_db()
        assert reseller_model.credits == 13

    @pytest.mark.parametrize("credits", [0, -3, "lots"])
    def test_add_invalid_credits(self, admin_client, reseller_model, credits):
        response = admin_client.post(
            f"/api/v1/admin/resellers/{reseller_model.id}/credits",
            {"credits": credits},
            format="json",
        )

        assert response.status_code == 400
        reseller_model.refresh_from_db()
        assert reseller_model.credits == 3

    def test_add_credits_unknown_reseller(self, admin_client):
        response = admin_client.post(
            "/api/v1/admin/resellers/9999/credits", {"credits": 5}, format="json"
        )

        assert response.status_code == 404
        assert response.data["error"]["code"] == "RESELLER_NOT_FOUND"

    def test_delete_reseller_revokes_keys(self, admin_client, issue_key, reseller_model):
        key = issue_key()

        response = admin_client.delete(f"/api/v1/admin/resellers/{reseller_model.id}")

        assert response.status_code == 200
        assert response.data == {"message": "Reseller deleted successfully", "keysRevoked": 1}
        assert not ResellerModel.objects.filter(id=reseller_model.id).exists()
        stored = LicenseKeyModel.objects.get(id=key["id"])
        assert stored.is_active is False
        assert stored.reseller_id is None

        keys = admin_client.get("/api/v1/admin/keys")
        assert keys.data["keys"][0]["createdBy"] is None

    def test_delete_unknown_reseller(self, admin_client):
        response = admin_client.delete("/api/v1/admin/resellers/9999")

        assert response.status_code == 404


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminKeysAndTokensAPI:
    """Tests for the registry-wide key list and referral tokens."""

    def test_list_all_keys(self, admin_client, issue_key):
        first = issue_key()
        second = issue_key()

        response = admin_client.get("/api/v1/admin/keys")

        assert response.status_code == 200
        assert [k["id"] for k in response.data["keys"]] == [second["id"], first["id"]]
        assert response.data["keys"][0]["createdBy"] == "reseller1"

    def test_issue_and_list_tokens(self, admin_client):
        issued = admin_client.post("/api/v1/admin/referral-tokens")

        assert issued.status_code == 201
        token = issued.data["token"]
        assert token["token"].startswith("X-R-T0K3N-")
        assert token["createdBy"] == "admin"
        assert token["used"] is False
        assert token["usedBy"] is None

        listed = admin_client.get("/api/v1/admin/referral-tokens")
        assert [t["token"] for t in listed.data["tokens"]] == [token["token"]]
