"""
Unit tests for reseller account handlers.
"""
import pytest

from core.domain.exceptions import (
    InvalidAmountError,
    InvalidCredentialsError,
    ResellerNotFoundError,
)
from resellers.application.commands.add_credits import AddCreditsCommand
from resellers.application.commands.authenticate_reseller import (
    AuthenticateResellerCommand,
)
from resellers.application.commands.delete_reseller import DeleteResellerCommand
from resellers.application.handlers.reseller_handlers import (
    AddCreditsHandler,
    AuthenticateResellerHandler,
    DeleteResellerHandler,
    GetResellerHandler,
    ListResellersHandler,
)
from resellers.application.queries.get_reseller import GetResellerQuery
from resellers.application.queries.list_resellers import ListResellersQuery


@pytest.mark.unit
@pytest.mark.asyncio
class TestAuthenticateResellerHandler:
    """Tests for AuthenticateResellerHandler."""

    async def test_valid_credentials(self, reseller_repository, reseller):
        handler = AuthenticateResellerHandler(reseller_repository)

        dto = await handler.handle(AuthenticateResellerCommand("reseller1", "secret123"))

        assert dto.id == reseller.id
        assert dto.username == "reseller1"

    async def test_wrong_password(self, reseller_repository, reseller):
        handler = AuthenticateResellerHandler(reseller_repository)

        with pytest.raises(InvalidCredentialsError):
            await handler.handle(AuthenticateResellerCommand("reseller1", "nope-nope"))

    async def test_unknown_username(self, reseller_repository):
        """Unknown users get the same error as wrong passwords."""
        handler = AuthenticateResellerHandler(reseller_repository)

        with pytest.raises(InvalidCredentialsError):
            await handler.handle(AuthenticateResellerCommand("ghost", "secret123"))


@pytest.mark.unit
@pytest.mark.asyncio
class TestAddCreditsHandler:
    """Tests for AddCreditsHandler."""

    async def test_add_credits(self, reseller_repository, reseller):
        handler = AddCreditsHandler(reseller_repository)

        dto = await handler.handle(AddCreditsCommand(reseller_id=reseller.id, amount=10))

        assert dto.credits == 10
        stored = await reseller_repository.find_by_id(reseller.id)
        assert stored.credits == 10

    @pytest.mark.parametrize("amount", [0, -1, 2.5])
    async def test_invalid_amount(self, reseller_repository, reseller, amount):
        handler = AddCreditsHandler(reseller_repository)

        with pytest.raises(InvalidAmountError):
            await handler.handle(AddCreditsCommand(reseller_id=reseller.id, amount=amount))

        stored = await reseller_repository.find_by_id(reseller.id)
        assert stored.credits == 0

    async def test_unknown_reseller(self, reseller_repository):
        handler = AddCreditsHandler(reseller_repository)

        with pytest.raises(ResellerNotFoundError):
            await handler.handle(AddCreditsCommand(reseller_id=42, amount=5))


@pytest.mark.unit
@pytest.mark.asyncio
class TestDeleteResellerHandler:
    """Tests for DeleteResellerHandler."""

    async def test_delete_revokes_and_detaches_keys(
        self, reseller_repository, license_key_repository, reseller, make_key
    ):
        """Every key of a deleted reseller is revoked and loses its owner."""
        active = make_key(reseller.id)
        already_revoked = make_key(reseller.id)
        await license_key_repository.deactivate(already_revoked.id)
        handler = DeleteResellerHandler(reseller_repository)

        result = await handler.handle(DeleteResellerCommand(reseller_id=reseller.id))

        assert result.keys_revoked == 1
        assert await reseller_repository.find_by_id(reseller.id) is None
        for key_id in (active.id, already_revoked.id):
            key = await license_key_repository.find_by_id(key_id)
            assert key.is_active is False
            assert key.reseller_id is None

    async def test_delete_leaves_other_resellers_keys(
        self, reseller_repository, license_key_repository, reseller, make_reseller, make_key
    ):
        other = make_reseller(username="other")
        other_key = make_key(other.id)
        handler = DeleteResellerHandler(reseller_repository)

        await handler.handle(DeleteResellerCommand(reseller_id=reseller.id))

        key = await license_key_repository.find_by_id(other_key.id)
        assert key.is_active is True
        assert key.reseller_id == other.id

    async def test_delete_unknown_reseller(self, reseller_repository):
        handler = DeleteResellerHandler(reseller_repository)

        with pytest.raises(ResellerNotFoundError):
            await handler.handle(DeleteResellerCommand(reseller_id=999))


@pytest.mark.unit
@pytest.mark.asyncio
class TestResellerQueries:
    """Tests for reseller query handlers."""

    async def test_get_reseller(self, reseller_repository, funded_reseller):
        dto = await GetResellerHandler(reseller_repository).handle(
            GetResellerQuery(reseller_id=funded_reseller.id)
        )
        assert dto.credits == 5

    async def test_get_unknown_reseller(self, reseller_repository):
        with pytest.raises(ResellerNotFoundError):
            await GetResellerHandler(reseller_repository).handle(GetResellerQuery(7))

    async def test_list_resellers_by_id(self, reseller_repository, reseller, funded_reseller):
        dtos = await ListResellersHandler(reseller_repository).handle(ListResellersQuery())
        assert [d.id for d in dtos] == [reseller.id, funded_reseller.id]
