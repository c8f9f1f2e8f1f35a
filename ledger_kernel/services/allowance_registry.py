"""
AllowanceRegistry -- spending quotas for delegated transfers.

Responsibility:
    The only writer of ``allowances``.  ``approve`` overwrites a quota,
    ``consume`` spends from it, and ``increase``/``decrease`` adjust it
    relative to its current value.  Every change to a quota emits one
    APPROVAL event carrying the resulting quota.

Architecture position:
    Kernel > Services.  ``consume`` is called by TransferOrchestrator as
    the first step of a delegated transfer.

Invariants enforced:
    NON_NEGATIVE_ALLOWANCE -- consume/decrease check before writing.

Failure modes:
    - ZeroAddressError when owner or spender is the null account.
    - AllowanceExceededError when the quota is below the amount.
"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.clock import Clock
from ledger_kernel.domain.dtos import ApprovalReceipt
from ledger_kernel.domain.values import MAX_SUPPLY, require_address, require_amount
from ledger_kernel.exceptions import AllowanceExceededError, InvalidAmountError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.allowance import Allowance
from ledger_kernel.services.base import BaseService
from ledger_kernel.services.event_recorder import EventRecorder

logger = get_logger("services.allowance_registry")


class AllowanceRegistry(BaseService):
    """Per (owner, spender) spending quotas."""

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session)
        self._events = EventRecorder(session, clock)

    def allowance_of(self, owner: str, spender: str) -> int:
        """Remaining quota; 0 when never approved."""
        row = self._get(owner, spender)
        return row.amount if row is not None else 0

    def approve(self, owner: str, spender: str, amount: int) -> ApprovalReceipt:
        """Overwrite the quota ``spender`` holds over ``owner``'s balance."""
        owner = require_address(owner, "owner")
        spender = require_address(spender, "spender")
        amount = require_amount(amount)

        with self.atomic():
            self._store(owner, spender, amount)
            receipt = self._emit(uuid4(), owner, spender, amount)

        logger.info(
            "allowance_approved",
            extra={"owner": owner, "spender": spender, "allowance": amount},
        )
        return receipt

    def increase(self, owner: str, spender: str, added: int) -> ApprovalReceipt:
        """Add ``added`` to the current quota."""
        owner = require_address(owner, "owner")
        spender = require_address(spender, "spender")
        added = require_amount(added, "added_value")

        with self.atomic():
            new_amount = self.allowance_of(owner, spender) + added
            if new_amount > MAX_SUPPLY:
                raise InvalidAmountError(
                    "allowance", new_amount, f"exceeds maximum {MAX_SUPPLY}"
                )
            self._store(owner, spender, new_amount)
            receipt = self._emit(uuid4(), owner, spender, new_amount)

        logger.info(
            "allowance_increased",
            extra={"owner": owner, "spender": spender, "allowance": new_amount},
        )
        return receipt

    def decrease(self, owner: str, spender: str, subtracted: int) -> ApprovalReceipt:
        """Subtract ``subtracted`` from the current quota; never below zero."""
        owner = require_address(owner, "owner")
        spender = require_address(spender, "spender")
        subtracted = require_amount(subtracted, "subtracted_value")

        with self.atomic():
            current = self.allowance_of(owner, spender)
            if current < subtracted:
                raise AllowanceExceededError(owner, spender, current, subtracted)
            self._store(owner, spender, current - subtracted)
            receipt = self._emit(uuid4(), owner, spender, current - subtracted)

        logger.info(
            "allowance_decreased",
            extra={"owner": owner, "spender": spender, "allowance": current - subtracted},
        )
        return receipt

    def consume(self, owner: str, spender: str, amount: int) -> int:
        """
        Spend ``amount`` of the quota.  Emits no event; the transfer it
        funds emits its own.

        Postconditions: returns the remaining quota.

        Raises:
            AllowanceExceededError: If the quota is below ``amount``.
        """
        amount = require_amount(amount)
        row = self._get(owner, spender, for_update=True)
        current = row.amount if row is not None else 0
        if current < amount:
            raise AllowanceExceededError(owner, spender, current, amount)

        if row is not None:
            row.amount = current - amount
        self.session.flush()

        logger.debug(
            "allowance_consumed",
            extra={
                "owner": owner,
                "spender": spender,
                "amount": amount,
                "allowance": current - amount,
            },
        )
        return current - amount

    def _store(self, owner: str, spender: str, amount: int) -> None:
        row = self._get(owner, spender, for_update=True)
        if row is None:
            row = Allowance(owner=owner, spender=spender, amount=amount)
            self.session.add(row)
        else:
            row.amount = amount
        self.session.flush()

    def _emit(self, tx_id: UUID, owner: str, spender: str, amount: int) -> ApprovalReceipt:
        event = self._events.record_approval(tx_id, owner, spender, amount)
        return ApprovalReceipt(
            tx_id=tx_id,
            owner=owner,
            spender=spender,
            allowance=amount,
            event=event,
        )

    def _get(self, owner: str, spender: str, for_update: bool = False) -> Allowance | None:
        stmt = select(Allowance).where(
            Allowance.owner == owner,
            Allowance.spender == spender,
        )
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()
