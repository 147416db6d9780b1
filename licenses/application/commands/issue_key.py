"""
IssueKeyCommand.

Command for a reseller to mint a license key, paid with credits.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class IssueKeyCommand:
    """
    Command to issue a license key.

    Values arrive as the client sent them and are validated by the
    handler.
    """

    reseller_id: int
    game: str
    device_limit: int
    expiry_days: int
    custom_key: Optional[str] = None
