"""
RegisterResellerCommand.

Command to create a reseller account by redeeming a referral token.
"""

from dataclasses import dataclass


@dataclass
class RegisterResellerCommand:
    """Command to register a reseller with a referral token."""

    username: str
    password: str
    referral_token: str
