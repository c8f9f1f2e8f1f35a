"""Boundary layer: governance gate, deployment, and the TokenLedger facade."""

from ledger_services.authority import OwnerAuthority
from ledger_services.bootstrap import deploy_ledger
from ledger_services.token_ledger import TokenLedger

__all__ = [
    "OwnerAuthority",
    "TokenLedger",
    "deploy_ledger",
]
