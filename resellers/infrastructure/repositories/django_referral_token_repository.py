"""
Django implementation of ReferralTokenRepository port.
"""
from typing import List, Optional

from asgiref.sync import sync_to_async

from resellers.domain.referral_token import ReferralToken
from resellers.infrastructure.models import (
    ReferralToken as ReferralTokenModel,
)
from resellers.ports.referral_token_repository import ReferralTokenRepository


class DjangoReferralTokenRepository(ReferralTokenRepository):
    """Django ORM implementation of ReferralTokenRepository."""

    def _to_domain(self, model: ReferralTokenModel) -> ReferralToken:
        return ReferralToken(
            id=model.id,
            token=model.token,
            created_by=model.created_by,
            used=model.used,
            used_by=model.used_by,
            created_at=model.created_at,
            used_at=model.used_at,
        )

    @sync_to_async
    def save(self, token: ReferralToken) -> ReferralToken:
        """
        Save a referral token entity.

        Args:
            token: ReferralToken entity to save

        Returns:
            Saved entity
        """
        if token.id is None:
            model = ReferralTokenModel.objects.create(
                token=token.token,
                created_by=token.created_by,
                used=token.used,
                used_by=token.used_by,
                created_at=token.created_at,
                used_at=token.used_at,
            )
        else:
            model = ReferralTokenModel.objects.get(id=token.id)
            model.used = token.used
            model.used_by = token.used_by
            model.used_at = token.used_at
            model.save(update_fields=["used", "used_by", "used_at"])
        return self._to_domain(model)

    @sync_to_async
    def find_by_token(self, token: str) -> Optional[ReferralToken]:
        try:
            model = ReferralTokenModel.objects.get(token=token)
            return self._to_domain(model)
        except ReferralTokenModel.DoesNotExist:
            return None

    @sync_to_async
    def list_all(self) -> List[ReferralToken]:
        models = ReferralTokenModel.objects.order_by("-created_at", "-id")
        return [self._to_domain(m) for m in models]
