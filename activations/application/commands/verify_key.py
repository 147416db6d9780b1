"""
VerifyKeyCommand.

Command sent by client software to check a key for a device.
"""

from dataclasses import dataclass


@dataclass
class VerifyKeyCommand:
    """Command to verify a license key on a device."""

    key: str
    device_id: str
