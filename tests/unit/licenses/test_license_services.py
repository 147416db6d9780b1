"""
Unit tests for key registry domain services.
"""

import pytest
from django.test import override_settings

from core.domain.exceptions import KeyOwnershipError, ValidationError
from licenses.domain.license_key import LicenseKey
from licenses.domain.services import KeyIssuePolicy, KeyOwnership


class TestKeyIssuePolicy:
    """Tests for KeyIssuePolicy service."""

    def test_valid_request(self):
        terms = KeyIssuePolicy.validate("Free Fire", 2, 30)

        assert terms.game == "Free Fire"
        assert terms.device_limit == 2
        assert terms.expiry_days == 30
        assert terms.custom_key is None

    @pytest.mark.parametrize("game", [None, "", "   ", 5])
    def test_missing_game(self, game):
        with pytest.raises(ValidationError, match="Game is required"):
            KeyIssuePolicy.validate(game, 1, 30)

    def test_unsupported_game(self):
        with pytest.raises(ValidationError, match="Unsupported game: Chess"):
            KeyIssuePolicy.validate("Chess", 1, 30)

    @pytest.mark.parametrize("device_limit", [0, 3, 99, 101, "1", True, None])
    def test_device_limit_not_allowed(self, device_limit):
        with pytest.raises(ValidationError, match="Device limit must be one of: 1, 2, 100"):
            KeyIssuePolicy.validate("Free Fire", device_limit, 30)

    @pytest.mark.parametrize("device_limit", [1, 2, 100])
    def test_device_limit_allowed(self, device_limit):
        assert KeyIssuePolicy.validate("Free Fire", device_limit, 30).device_limit == device_limit

    @pytest.mark.parametrize("expiry_days", [0, -1, 366, 1.5, "30", None])
    def test_expiry_days_out_of_range(self, expiry_days):
        with pytest.raises(ValidationError, match="Expiry days must be between 1 and 365"):
            KeyIssuePolicy.validate("Free Fire", 1, expiry_days)

    @pytest.mark.parametrize("expiry_days", [1, 365])
    def test_expiry_days_bounds(self, expiry_days):
        assert KeyIssuePolicy.validate("Free Fire", 1, expiry_days).expiry_days == expiry_days

    def test_custom_key_trimmed(self):
        terms = KeyIssuePolicy.validate("Free Fire", 1, 30, custom_key="  VIP-KEY-01  ")
        assert terms.custom_key == "VIP-KEY-01"

    def test_blank_custom_key_means_generated(self):
        assert KeyIssuePolicy.validate("Free Fire", 1, 30, custom_key="   ").custom_key is None

    @pytest.mark.parametrize("custom_key", ["ABCD", "K" * 101])
    def test_custom_key_length(self, custom_key):
        with pytest.raises(ValidationError, match="between 5 and 100"):
            KeyIssuePolicy.validate("Free Fire", 1, 30, custom_key=custom_key)

    def test_configured_games(self):
        """Supported games come from the LICENSE_SERVICE setting."""
        with override_settings(LICENSE_SERVICE={"SUPPORTED_GAMES": ("PUBG",)}):
            assert KeyIssuePolicy.validate("PUBG", 1, 30).game == "PUBG"
            with pytest.raises(ValidationError):
                KeyIssuePolicy.validate("Free Fire", 1, 30)


class TestKeyOwnership:
    """Tests for KeyOwnership service."""

    def test_owner_allowed(self):
        key = LicenseKey.create(game="Free Fire", device_limit=1, expiry_days=1, reseller_id=1)
        KeyOwnership.ensure_owned(key, 1)

    def test_other_reseller_rejected(self):
        key = LicenseKey.create(game="Free Fire", device_limit=1, expiry_days=1, reseller_id=1)
        with pytest.raises(KeyOwnershipError):
            KeyOwnership.ensure_owned(key, 2)
