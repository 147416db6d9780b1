"""
AddCreditsCommand.

Command to top up a reseller's credit balance.
"""

from dataclasses import dataclass


@dataclass
class AddCreditsCommand:
    """Command to add credits to a reseller."""

    reseller_id: int
    amount: int
