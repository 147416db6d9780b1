"""
In-memory implementation of ResellerRepository port.
"""
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

from core.domain.exceptions import InvalidReferralTokenError, UsernameTakenError
from core.infrastructure.memory import InMemoryStore
from resellers.domain.reseller import Reseller
from resellers.ports.reseller_repository import ResellerRepository


class InMemoryResellerRepository(ResellerRepository):
    """ResellerRepository backed by an InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def find_by_id(self, reseller_id: int) -> Optional[Reseller]:
        with self.store.lock:
            return self.store.resellers.get(reseller_id)

    async def find_by_username(self, username: str) -> Optional[Reseller]:
        with self.store.lock:
            for reseller in self.store.resellers.values():
                if str(reseller.username) == username:
                    return reseller
            return None

    async def find_usernames(self, reseller_ids: List[int]) -> Dict[int, str]:
        with self.store.lock:
            return {
                rid: str(self.store.resellers[rid].username)
                for rid in reseller_ids
                if rid in self.store.resellers
            }

    async def list_all(self) -> List[Reseller]:
        with self.store.lock:
            return [self.store.resellers[rid] for rid in sorted(self.store.resellers)]

    async def register_with_token(
        self, reseller: Reseller, token: str, used_at: datetime
    ) -> Reseller:
        username = str(reseller.username)
        with self.store.lock:
            if any(str(r.username) == username for r in self.store.resellers.values()):
                raise UsernameTakenError()

            referral = self.store.referral_tokens.get(token)
            if referral is None or referral.used:
                raise InvalidReferralTokenError()

            self.store.referral_tokens[token] = referral.consume(username, used_at)
            saved = replace(reseller, id=self.store.next_id("resellers"))
            self.store.resellers[saved.id] = saved
            return saved

    async def add_credits(self, reseller_id: int, amount: int) -> Optional[Reseller]:
        with self.store.lock:
            reseller = self.store.resellers.get(reseller_id)
            if reseller is None:
                return None
            updated = reseller.with_credits(reseller.credits + amount)
            self.store.resellers[reseller_id] = updated
            return updated

    async def delete_and_revoke_keys(self, reseller_id: int) -> Optional[int]:
        with self.store.lock:
            if reseller_id not in self.store.resellers:
                return None
            revoked = 0
            for key_id, key in list(self.store.license_keys.items()):
                if key.reseller_id != reseller_id:
                    continue
                if key.is_active:
                    revoked += 1
                self.store.license_keys[key_id] = replace(
                    key, is_active=False, reseller_id=None
                )
            del self.store.resellers[reseller_id]
            return revoked
