"""
TransferOrchestrator -- the fee-splitting transfer algorithm.

Responsibility:
    Validates a transfer request, picks the fee recipient from the
    referral registry, computes the fee, and applies the three balance
    mutations and two events that make up one transfer.  It is the only
    caller of BalanceLedger after genesis.

Architecture position:
    Kernel > Services.  Called by the boundary facade for direct and
    delegated transfers.  Authorization-agnostic: the caller identity is
    passed in explicitly.

Algorithm (one atomic unit):
    1. Reject a null sender/recipient (ZeroAddressError) or a zero amount
       (ZeroAmountError).
    2. Reject when balance_of(sender) < amount (InsufficientBalanceError).
    3. Debit sender by amount.
    4. Fee recipient/rate: the sender's referrer at the referral rate,
       else the beneficiary at the beneficiary rate.
    5. fee = floor(amount * rate / 10_000).
    6. Credit fee recipient by fee; record the FEE leg event.
    7. Credit recipient by amount - fee; record the NET leg event.

Invariants enforced:
    CONSERVATION -- debit(amount) == credit(fee) + credit(net).
    ATOMICITY -- the whole algorithm (and, for delegated transfers, the
        allowance consumption before it) runs inside one savepoint.
    Event order -- FEE leg seq < NET leg seq, always both recorded, even
        when fee == 0 or when fee recipient and recipient coincide.  Two
        credits are applied separately in that case, never coalesced.
"""

from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from ledger_kernel.domain.clock import Clock
from ledger_kernel.domain.dtos import (
    FeeSource,
    TransferLegKind,
    TransferQuote,
    TransferReceipt,
)
from ledger_kernel.domain.fees import split_amount
from ledger_kernel.domain.values import require_address, require_amount
from ledger_kernel.exceptions import (
    InsufficientBalanceError,
    LedgerKernelError,
    ZeroAmountError,
)
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.services.allowance_registry import AllowanceRegistry
from ledger_kernel.services.balance_ledger import BalanceLedger
from ledger_kernel.services.base import BaseService
from ledger_kernel.services.event_recorder import EventRecorder
from ledger_kernel.services.fee_policy_service import FeePolicyService
from ledger_kernel.services.referral_registry import ReferralRegistry

logger = get_logger("services.transfer_orchestrator")


class TransferOrchestrator(BaseService):
    """
    Direct and delegated transfers with automatic fee split.

    Contract:
        ``transfer`` and ``transfer_delegated`` either complete fully and
        return a TransferReceipt, or raise a LedgerKernelError subclass
        with no state changed.
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session)
        self._balances = BalanceLedger(session)
        self._allowances = AllowanceRegistry(session, clock)
        self._referrals = ReferralRegistry(session, clock)
        self._fee_policy = FeePolicyService(session)
        self._events = EventRecorder(session, clock)

    def quote(self, sender: str, amount: int) -> TransferQuote:
        """Fee split a transfer of ``amount`` from ``sender`` would use now."""
        sender = require_address(sender, "sender")
        amount = require_amount(amount)
        fee_recipient, fee_source, rate_bp = self._fee_route(sender)
        split = split_amount(amount, rate_bp)
        return TransferQuote(
            sender=sender,
            amount=amount,
            fee_recipient=fee_recipient,
            fee_source=fee_source,
            fee_rate_bp=rate_bp,
            fee=split.fee,
            net=split.net,
        )

    def transfer(self, sender: str, recipient: str, amount: int) -> TransferReceipt:
        """Move ``amount`` out of ``sender``; ``recipient`` receives the net."""
        tx_id = uuid4()
        with LogContext.bind(tx_id=str(tx_id)):
            try:
                with self.atomic():
                    receipt = self._execute(tx_id, sender, recipient, amount)
            except LedgerKernelError as exc:
                self._log_rejection(exc, sender, recipient, amount)
                raise
        return receipt

    def transfer_delegated(
        self,
        owner: str,
        spender: str,
        recipient: str,
        amount: int,
    ) -> TransferReceipt:
        """
        ``spender`` moves ``amount`` out of ``owner``'s balance.

        The allowance is consumed first; if that or any later step fails,
        the allowance is restored along with everything else.
        """
        tx_id = uuid4()
        with LogContext.bind(tx_id=str(tx_id)):
            try:
                with self.atomic():
                    owner = require_address(owner, "owner")
                    spender = require_address(spender, "spender")
                    self._allowances.consume(owner, spender, require_amount(amount))
                    receipt = self._execute(tx_id, owner, recipient, amount, spender=spender)
            except LedgerKernelError as exc:
                self._log_rejection(exc, owner, recipient, amount, spender=spender)
                raise
        return receipt

    def _execute(
        self,
        tx_id: UUID,
        sender: str,
        recipient: str,
        amount: int,
        spender: str | None = None,
    ) -> TransferReceipt:
        # 1. Request shape
        sender = require_address(sender, "sender")
        recipient = require_address(recipient, "recipient")
        amount = require_amount(amount)
        if amount == 0:
            raise ZeroAmountError()

        # 2. Funds
        balance = self._balances.balance_of(sender)
        if balance < amount:
            raise InsufficientBalanceError(sender, balance, amount)

        # 3. Debit the full amount
        self._balances.debit(sender, amount)

        # 4-5. Route and size the fee
        fee_recipient, fee_source, rate_bp = self._fee_route(sender)
        split = split_amount(amount, rate_bp)

        # 6. Fee leg
        self._balances.credit(fee_recipient, split.fee)
        fee_leg = self._events.record_transfer(
            tx_id, TransferLegKind.FEE, sender, fee_recipient, split.fee
        )

        # 7. Net leg
        self._balances.credit(recipient, split.net)
        net_leg = self._events.record_transfer(
            tx_id, TransferLegKind.NET, sender, recipient, split.net
        )

        logger.info(
            "transfer_completed",
            extra={
                "sender": sender,
                "recipient": recipient,
                "spender": spender,
                "amount": amount,
                "fee_recipient": fee_recipient,
                "fee_source": fee_source.value,
                "fee_rate_bp": rate_bp,
                "fee": split.fee,
                "net": split.net,
            },
        )

        return TransferReceipt(
            tx_id=tx_id,
            sender=sender,
            recipient=recipient,
            amount=amount,
            fee_recipient=fee_recipient,
            fee_source=fee_source,
            fee_rate_bp=rate_bp,
            fee=split.fee,
            net=split.net,
            legs=(fee_leg, net_leg),
            spender=spender,
        )

    def _fee_route(self, sender: str) -> tuple[str, FeeSource, int]:
        referrer = self._referrals.referrer_of(sender)
        rate_bp = self._fee_policy.current_rates().rate_for(has_referrer=referrer is not None)
        if referrer is not None:
            return referrer, FeeSource.REFERRER, rate_bp
        return self._fee_policy.beneficiary(), FeeSource.BENEFICIARY, rate_bp

    def _log_rejection(
        self,
        exc: LedgerKernelError,
        sender: object,
        recipient: object,
        amount: object,
        spender: object = None,
    ) -> None:
        logger.warning(
            "transfer_rejected",
            extra={
                "error_code": exc.code,
                "sender": _as_text(sender),
                "recipient": _as_text(recipient),
                "spender": _as_text(spender),
                "amount": _as_text(amount),
            },
        )


def _as_text(value: object) -> str | None:
    """Raw request fields may be any type; keep log payloads JSON-safe."""
    if value is None or isinstance(value, str):
        return value
    return repr(value)
