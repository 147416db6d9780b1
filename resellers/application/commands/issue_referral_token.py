"""
IssueReferralTokenCommand.
"""

from dataclasses import dataclass


@dataclass
class IssueReferralTokenCommand:
    """Command for an admin to mint a single-use referral token."""

    created_by: str
