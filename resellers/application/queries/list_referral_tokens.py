"""
ListReferralTokensQuery.
"""

from dataclasses import dataclass


@dataclass
class ListReferralTokensQuery:
    """Query every referral token, used and unused (admin only)."""
