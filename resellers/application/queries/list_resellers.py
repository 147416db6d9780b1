"""
ListResellersQuery.
"""

from dataclasses import dataclass


@dataclass
class ListResellersQuery:
    """Query every reseller account (admin only)."""
