"""
Django implementation of ResellerRepository port.

This adapter converts between domain entities and Django ORM models.
Balance changes are single conditional UPDATE statements so that two
concurrent requests can never both observe the same balance.
"""
from datetime import datetime
from typing import Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import F

from core.domain.exceptions import InvalidReferralTokenError, UsernameTakenError
from core.domain.value_objects import Username
from licenses.infrastructure.models import LicenseKey as LicenseKeyModel
from resellers.domain.reseller import Reseller
from resellers.infrastructure.models import (
    ReferralToken as ReferralTokenModel,
)
from resellers.infrastructure.models import Reseller as ResellerModel
from resellers.ports.reseller_repository import ResellerRepository


class DjangoResellerRepository(ResellerRepository):
    """
    Django ORM implementation of ResellerRepository.
    """

    def _to_domain(self, model: ResellerModel) -> Reseller:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Reseller model

        Returns:
            Reseller domain entity
        """
        return Reseller(
            id=model.id,
            username=Username(model.username),
            password_hash=model.password,
            credits=model.credits,
            created_at=model.created_at,
        )

    @sync_to_async
    def find_by_id(self, reseller_id: int) -> Optional[Reseller]:
        try:
            model = ResellerModel.objects.get(id=reseller_id)
            return self._to_domain(model)
        except ResellerModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_username(self, username: str) -> Optional[Reseller]:
        try:
            model = ResellerModel.objects.get(username=username)
            return self._to_domain(model)
        except ResellerModel.DoesNotExist:
            return None

    @sync_to_async
    def find_usernames(self, reseller_ids: List[int]) -> Dict[int, str]:
        ids = {rid for rid in reseller_ids if rid is not None}
        if not ids:
            return {}
        rows = ResellerModel.objects.filter(id__in=ids).values_list("id", "username")
        return dict(rows)

    @sync_to_async
    def list_all(self) -> List[Reseller]:
        models = ResellerModel.objects.order_by("id")
        return [self._to_domain(m) for m in models]

    @sync_to_async
    def register_with_token(
        self, reseller: Reseller, token: str, used_at: datetime
    ) -> Reseller:
        """
        Consume the token and insert the reseller in one transaction.

        The token is claimed with a conditional UPDATE (used=False), so of
        two concurrent registrations with the same token only one row
        count comes back as 1.
        """
        username = str(reseller.username)
        with transaction.atomic():
            if ResellerModel.objects.filter(username=username).exists():
                raise UsernameTakenError()

            consumed = ReferralTokenModel.objects.filter(
                token=token, used=False
            ).update(used=True, used_by=username, used_at=used_at)
            if not consumed:
                raise InvalidReferralTokenError()

            try:
                with transaction.atomic():
                    model = ResellerModel.objects.create(
                        username=username,
                        password=reseller.password_hash,
                        credits=reseller.credits,
                        created_at=reseller.created_at,
                    )
            except IntegrityError as exc:
                # Lost a race on the username; the outer block rolls the
                # token claim back.
                raise UsernameTakenError() from exc

        return self._to_domain(model)

    @sync_to_async
    def add_credits(self, reseller_id: int, amount: int) -> Optional[Reseller]:
        with transaction.atomic():
            updated = ResellerModel.objects.filter(id=reseller_id).update(
                credits=F("credits") + amount
            )
            if not updated:
                return None
            model = ResellerModel.objects.get(id=reseller_id)
        return self._to_domain(model)

    @sync_to_async
    def delete_and_revoke_keys(self, reseller_id: int) -> Optional[int]:
        """
        Revoke the reseller's keys, detach them, and delete the reseller.

        Keys stay in the registry (visible to the admin, verifying as
        revoked) with no owner.
        """
        with transaction.atomic():
            deleted_rows = ResellerModel.objects.select_for_update().filter(id=reseller_id)
            if not deleted_rows.exists():
                return None
            revoked = LicenseKeyModel.objects.filter(
                reseller_id=reseller_id, is_active=True
            ).update(is_active=False)
            LicenseKeyModel.objects.filter(reseller_id=reseller_id).update(reseller=None)
            deleted_rows.delete()
        return revoked
