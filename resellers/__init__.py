"""
Resellers module - Identity store and credit ledger.

This module handles:
- Reseller accounts and password verification
- Referral tokens gating registration
- Credit balances spent on key issuance
"""
