"""Selectors for the ledger kernel (read side)."""

from ledger_kernel.selectors.ledger_selector import HolderBalance, LedgerSelector

__all__ = [
    "HolderBalance",
    "LedgerSelector",
]
