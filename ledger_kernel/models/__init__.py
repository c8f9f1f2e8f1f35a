"""ORM models for the ledger kernel."""

from ledger_kernel.models.allowance import Allowance
from ledger_kernel.models.balance import AccountBalance
from ledger_kernel.models.ledger_event import LedgerEvent
from ledger_kernel.models.ledger_settings import SINGLETON_KEY, LedgerSettings
from ledger_kernel.models.referral import ReferralAssignment

__all__ = [
    "AccountBalance",
    "Allowance",
    "LedgerEvent",
    "LedgerSettings",
    "ReferralAssignment",
    "SINGLETON_KEY",
]
