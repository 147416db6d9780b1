"""
ListKeyDevicesQuery.
"""

from dataclasses import dataclass


@dataclass
class ListKeyDevicesQuery:
    """Query the devices bound to a key, on behalf of its owner."""

    key_id: int
    reseller_id: int
