"""
Ledger Kernel

A fungible-asset ledger whose every transfer is split into a fee leg and a
net leg:
- Checked balance debits and credits with a fixed total supply
- Spending allowances for delegated transfers
- Write-once referral assignments that route transfer fees
- Bounded, ordered fee rates (referral <= beneficiary <= 5%)
- Append-only event log of every value movement and approval
"""

__version__ = "0.1.0"
