"""
GetResellerQuery.
"""

from dataclasses import dataclass


@dataclass
class GetResellerQuery:
    """Query a single reseller (used for the balance view)."""

    reseller_id: int
