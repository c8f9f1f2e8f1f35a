"""Services for the ledger kernel (write side)."""

from ledger_kernel.services.allowance_registry import AllowanceRegistry
from ledger_kernel.services.balance_ledger import BalanceLedger
from ledger_kernel.services.event_recorder import EventRecorder
from ledger_kernel.services.fee_policy_service import FeePolicyService
from ledger_kernel.services.genesis_service import GenesisService
from ledger_kernel.services.referral_registry import ReferralRegistry
from ledger_kernel.services.sequence_service import SequenceService
from ledger_kernel.services.transfer_orchestrator import TransferOrchestrator

__all__ = [
    "AllowanceRegistry",
    "BalanceLedger",
    "EventRecorder",
    "FeePolicyService",
    "GenesisService",
    "ReferralRegistry",
    "SequenceService",
    "TransferOrchestrator",
]
