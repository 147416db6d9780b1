"""
In-memory implementation of ReferralTokenRepository port.
"""
from dataclasses import replace
from typing import List, Optional

from core.infrastructure.memory import InMemoryStore
from resellers.domain.referral_token import ReferralToken
from resellers.ports.referral_token_repository import ReferralTokenRepository


class InMemoryReferralTokenRepository(ReferralTokenRepository):
    """ReferralTokenRepository backed by an InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def save(self, token: ReferralToken) -> ReferralToken:
        with self.store.lock:
            if token.id is None:
                token = replace(token, id=self.store.next_id("referral_tokens"))
            self.store.referral_tokens[token.token] = token
            return token

    async def find_by_token(self, token: str) -> Optional[ReferralToken]:
        with self.store.lock:
            return self.store.referral_tokens.get(token)

    async def list_all(self) -> List[ReferralToken]:
        with self.store.lock:
            tokens = list(self.store.referral_tokens.values())
        return sorted(tokens, key=lambda t: (t.created_at, t.id), reverse=True)
