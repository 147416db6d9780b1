"""
Unit tests for Reseller and ReferralToken entities and the credit ledger.
"""
import re
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from core.domain.exceptions import (
    InsufficientCreditsError,
    InvalidAmountError,
    ResellerNotFoundError,
)
from resellers.domain.referral_token import ReferralToken, generate_referral_token
from resellers.domain.reseller import Reseller
from resellers.domain.services import CreditLedger

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


class TestReseller:
    """Tests for Reseller entity."""

    def test_create_reseller(self):
        """A new reseller starts with an empty balance and a hashed password."""
        reseller = Reseller.create(username="alice", password="secret123", created_at=NOW)

        assert reseller.id is None
        assert str(reseller.username) == "alice"
        assert reseller.credits == 0
        assert reseller.created_at == NOW
        assert reseller.password_hash != "secret123"

    def test_check_password(self):
        reseller = Reseller.create(username="alice", password="secret123")

        assert reseller.check_password("secret123") is True
        assert reseller.check_password("wrong-password") is False

    def test_username_is_stripped(self):
        reseller = Reseller.create(username="  alice  ", password="secret123")
        assert str(reseller.username) == "alice"

    def test_short_password_rejected(self):
        """Test password below the minimum length."""
        with pytest.raises(ValueError, match="at least 6"):
            Reseller.create(username="alice", password="12345")

    def test_invalid_username_rejected(self):
        with pytest.raises(ValueError, match="at least 3"):
            Reseller.create(username="al", password="secret123")

    def test_negative_credits_rejected(self):
        """Balances never go below zero."""
        reseller = Reseller.create(username="alice", password="secret123")
        with pytest.raises(ValueError, match="cannot be negative"):
            replace(reseller, credits=-1)

    def test_can_afford(self):
        reseller = Reseller.create(username="alice", password="secret123").with_credits(2)

        assert reseller.can_afford(1)
        assert reseller.can_afford(2)
        assert not reseller.can_afford(3)


class TestReferralToken:
    """Tests for ReferralToken entity."""

    def test_generate_token_format(self):
        token = generate_referral_token("X-R-T0K3N-")
        assert re.fullmatch(r"X-R-T0K3N-[0-9A-F]{24}", token)

    def test_generated_tokens_are_unique(self):
        tokens = {generate_referral_token("X-R-T0K3N-") for _ in range(200)}
        assert len(tokens) == 200

    def test_create_token(self):
        token = ReferralToken.create(created_by="admin", prefix="X-R-T0K3N-", created_at=NOW)

        assert token.used is False
        assert token.used_by is None
        assert token.used_at is None
        assert token.created_by == "admin"
        assert token.created_at == NOW

    def test_consume_token(self):
        """Consuming records who used the token and when."""
        token = ReferralToken.create(created_by="admin", prefix="X-R-T0K3N-")

        used = token.consume("alice", used_at=NOW)

        assert used.used is True
        assert used.used_by == "alice"
        assert used.used_at == NOW
        assert token.used is False  # Original unchanged

    def test_consume_twice_rejected(self):
        token = ReferralToken.create(created_by="admin", prefix="X-R-T0K3N-")
        used = token.consume("alice")

        with pytest.raises(ValueError, match="already used"):
            used.consume("bob")


@pytest.mark.asyncio
class TestCreditLedger:
    """Tests for CreditLedger service."""

    @pytest.mark.parametrize("amount", [0, -5, 1.5, "10", True, None])
    async def test_validate_amount_rejects(self, amount):
        with pytest.raises(InvalidAmountError):
            CreditLedger.validate_amount(amount)

    async def test_validate_amount_accepts_positive_int(self):
        assert CreditLedger.validate_amount(10) == 10

    async def test_ensure_can_afford(self, reseller, funded_reseller):
        CreditLedger.ensure_can_afford(funded_reseller, 1)
        with pytest.raises(InsufficientCreditsError):
            CreditLedger.ensure_can_afford(reseller, 1)

    async def test_add_credits(self, reseller, reseller_repository):
        """Top-ups are cumulative."""
        await CreditLedger.add_credits(reseller.id, 5, reseller_repository)
        updated = await CreditLedger.add_credits(reseller.id, 3, reseller_repository)

        assert updated.credits == 8

    async def test_add_credits_unknown_reseller(self, reseller_repository):
        with pytest.raises(ResellerNotFoundError):
            await CreditLedger.add_credits(999, 5, reseller_repository)
