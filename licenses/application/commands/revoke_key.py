"""
RevokeKeyCommand.
"""

from dataclasses import dataclass


@dataclass
class RevokeKeyCommand:
    """Command for a reseller to revoke one of its keys."""

    key_id: int
    reseller_id: int
