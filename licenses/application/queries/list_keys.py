"""
Key listing queries.
"""

from dataclasses import dataclass


@dataclass
class ListResellerKeysQuery:
    """Query the keys owned by one reseller."""

    reseller_id: int


@dataclass
class ListAllKeysQuery:
    """Query every key in the registry (admin only)."""
