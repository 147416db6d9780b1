"""
ResetKeyCommand.

Clears a key's device bindings and restarts its validity period.
"""

from dataclasses import dataclass


@dataclass
class ResetKeyCommand:
    """Command for a reseller to reset one of its keys."""

    key_id: int
    reseller_id: int
