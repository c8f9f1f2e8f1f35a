"""
ledger_services.token_ledger -- boundary facade over the ledger kernel.

Responsibility:
    Exposes the ledger's external operations with the caller supplied
    explicitly, the way a host passes the authenticated sender of a
    request.  Value-moving and approval calls delegate to kernel services;
    governance calls are gated by OwnerAuthority first.

Architecture position:
    Services layer.  Holds no state of its own: every instance reads and
    writes the ledger through the Session it was given.  The caller owns
    commit/rollback of that session (see ledger_kernel.db.session_scope).

Failure modes:
    Every kernel error propagates unchanged; a rejected call leaves the
    ledger exactly as it was.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.domain.clock import Clock
from ledger_kernel.domain.dtos import (
    ApprovalReceipt,
    LedgerEventRecord,
    LedgerMetadata,
    TransferQuote,
    TransferReceipt,
)
from ledger_kernel.logging_config import LogContext
from ledger_kernel.selectors.ledger_selector import HolderBalance, LedgerSelector
from ledger_kernel.services.allowance_registry import AllowanceRegistry
from ledger_kernel.services.fee_policy_service import FeePolicyService
from ledger_kernel.services.referral_registry import ReferralRegistry
from ledger_kernel.services.transfer_orchestrator import TransferOrchestrator
from ledger_services.authority import OwnerAuthority


class TokenLedger:
    """
    External interface of the referral fee-split ledger.

    Usage:
        with session_scope() as session:
            ledger = TokenLedger(session)
            ledger.set_referral(caller=alice, referrer=bob)
            ledger.transfer(caller=alice, recipient=dave, amount=1_000)
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        self._transfers = TransferOrchestrator(session, clock)
        self._allowances = AllowanceRegistry(session, clock)
        self._referrals = ReferralRegistry(session, clock)
        self._fee_policy = FeePolicyService(session)
        self._authority = OwnerAuthority(session)
        self._selector = LedgerSelector(session)

    # ------------------------------------------------------------------
    # Value movement
    # ------------------------------------------------------------------

    def transfer(self, caller: str, recipient: str, amount: int) -> bool:
        """Send ``amount`` from ``caller``; fee is split off automatically."""
        self.transfer_with_receipt(caller, recipient, amount)
        return True

    def transfer_with_receipt(self, caller: str, recipient: str, amount: int) -> TransferReceipt:
        """Same as ``transfer`` but returns the full receipt."""
        with LogContext.bind(caller=caller, operation="transfer"):
            return self._transfers.transfer(caller, recipient, amount)

    def transfer_delegated(self, caller: str, owner: str, recipient: str, amount: int) -> bool:
        """``caller`` spends ``amount`` of its allowance over ``owner``."""
        self.transfer_delegated_with_receipt(caller, owner, recipient, amount)
        return True

    def transfer_delegated_with_receipt(
        self,
        caller: str,
        owner: str,
        recipient: str,
        amount: int,
    ) -> TransferReceipt:
        with LogContext.bind(caller=caller, operation="transfer_delegated"):
            return self._transfers.transfer_delegated(owner, caller, recipient, amount)

    def quote(self, sender: str, amount: int) -> TransferQuote:
        """Preview the fee split of a transfer without executing it."""
        return self._transfers.quote(sender, amount)

    # ------------------------------------------------------------------
    # Allowances
    # ------------------------------------------------------------------

    def approve(self, caller: str, spender: str, amount: int) -> bool:
        """Set ``spender``'s quota over ``caller``'s balance to ``amount``."""
        with LogContext.bind(caller=caller, operation="approve"):
            self._allowances.approve(caller, spender, amount)
        return True

    def increase_allowance(self, caller: str, spender: str, added_value: int) -> ApprovalReceipt:
        with LogContext.bind(caller=caller, operation="increase_allowance"):
            return self._allowances.increase(caller, spender, added_value)

    def decrease_allowance(self, caller: str, spender: str, subtracted_value: int) -> ApprovalReceipt:
        with LogContext.bind(caller=caller, operation="decrease_allowance"):
            return self._allowances.decrease(caller, spender, subtracted_value)

    # ------------------------------------------------------------------
    # Referrals
    # ------------------------------------------------------------------

    def set_referral(self, caller: str, referrer: str) -> None:
        """Name ``referrer`` as ``caller``'s referrer.  Write-once."""
        with LogContext.bind(caller=caller, operation="set_referral"):
            self._referrals.set_referral(caller, referrer)

    def referred_by(self, referrer: str) -> list[str]:
        return self._referrals.referred_by(referrer)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self._selector.balance_of(account)

    def allowance_of(self, owner: str, spender: str) -> int:
        return self._selector.allowance_of(owner, spender)

    def referrer_of(self, account: str) -> str | None:
        return self._selector.referrer_of(account)

    def metadata(self) -> LedgerMetadata:
        return self._selector.metadata()

    def name(self) -> str:
        return self._selector.metadata().name

    def symbol(self) -> str:
        return self._selector.metadata().symbol

    def decimals(self) -> int:
        return self._selector.metadata().decimals

    def total_supply(self) -> int:
        return self._selector.total_supply()

    def referral_rate(self) -> int:
        return self._selector.fee_rates().referral_rate_bp

    def beneficiary_rate(self) -> int:
        return self._selector.fee_rates().beneficiary_rate_bp

    def beneficiary(self) -> str:
        return self._fee_policy.beneficiary()

    def owner(self) -> str:
        return self._authority.owner()

    def is_owner(self, caller: str) -> bool:
        return self._authority.is_owner(caller)

    def events(self, tx_id: UUID | None = None, account: str | None = None) -> list[LedgerEventRecord]:
        return self._selector.events(tx_id=tx_id, account=account)

    def holders(self) -> list[HolderBalance]:
        return self._selector.holders()

    def verify_conservation(self) -> int:
        return self._selector.verify_conservation()

    # ------------------------------------------------------------------
    # Governance (owner only)
    # ------------------------------------------------------------------

    def set_referral_rate(self, caller: str, new_rate_bp: int) -> None:
        with LogContext.bind(caller=caller, operation="set_referral_rate"):
            self._authority.require_owner(caller, "set_referral_rate")
            self._fee_policy.set_referral_rate(new_rate_bp)

    def set_beneficiary_rate(self, caller: str, new_rate_bp: int) -> None:
        with LogContext.bind(caller=caller, operation="set_beneficiary_rate"):
            self._authority.require_owner(caller, "set_beneficiary_rate")
            self._fee_policy.set_beneficiary_rate(new_rate_bp)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """Hand governance and the beneficiary role to ``new_owner``."""
        with LogContext.bind(caller=caller, operation="transfer_ownership"):
            self._authority.require_owner(caller, "transfer_ownership")
            self._fee_policy.set_owner(new_owner)
