"""
AuthenticateResellerCommand.
"""

from dataclasses import dataclass


@dataclass
class AuthenticateResellerCommand:
    """Command to check reseller login credentials."""

    username: str
    password: str
