"""
DeleteResellerCommand.
"""

from dataclasses import dataclass


@dataclass
class DeleteResellerCommand:
    """Command to delete a reseller and revoke every key it owns."""

    reseller_id: int
