"""
EventRecorder -- appends rows to the ledger event log.

Responsibility:
    Writes one LedgerEvent per observable movement or approval, stamped
    with the next ledger-event sequence number and the injected clock.

Architecture position:
    Kernel > Services.  Called by TransferOrchestrator, AllowanceRegistry,
    and GenesisService.  Never called from outside the kernel.

Invariants enforced:
    - Events are append-only and ordered by seq in the order this service
      is called.  The orchestrator calls it for the fee leg before the
      net leg.
"""

from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.dtos import EventKind, LedgerEventRecord, TransferLegKind
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.ledger_event import LedgerEvent
from ledger_kernel.services.base import BaseService
from ledger_kernel.services.sequence_service import SequenceService

logger = get_logger("services.event_recorder")


class EventRecorder(BaseService):
    """Append-only writer for the ledger event log."""

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session)
        self._clock = clock or SystemClock()
        self._sequences = SequenceService(session)

    def record_transfer(
        self,
        tx_id: UUID,
        leg: TransferLegKind,
        source: str,
        target: str,
        amount: int,
    ) -> LedgerEventRecord:
        """Record one value movement (fee, net, or mint leg)."""
        return self._append(tx_id, EventKind.TRANSFER, leg, source, target, amount)

    def record_approval(
        self,
        tx_id: UUID,
        owner: str,
        spender: str,
        allowance: int,
    ) -> LedgerEventRecord:
        """Record an allowance being set to ``allowance``."""
        return self._append(tx_id, EventKind.APPROVAL, None, owner, spender, allowance)

    def _append(
        self,
        tx_id: UUID,
        kind: EventKind,
        leg: TransferLegKind | None,
        source: str,
        target: str,
        amount: int,
    ) -> LedgerEventRecord:
        event = LedgerEvent(
            seq=self._sequences.next_value(SequenceService.LEDGER_EVENT),
            tx_id=tx_id,
            kind=kind.value,
            leg=leg.value if leg is not None else None,
            source=source,
            target=target,
            amount=amount,
            occurred_at=self._clock.now(),
        )
        self.session.add(event)
        self.session.flush()

        logger.info(
            "ledger_event_recorded",
            extra={
                "seq": event.seq,
                "kind": kind.value,
                "leg": leg.value if leg is not None else None,
                "source": source,
                "target": target,
                "amount": amount,
            },
        )
        return event.to_record()
