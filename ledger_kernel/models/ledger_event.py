"""
Module: ledger_kernel.models.ledger_event
Responsibility: ORM persistence for the append-only ledger event log -- the
    externally visible audit trail of value movements and approvals.
Architecture position: Kernel > Models.  May import from db/ and domain/dtos only.

Invariants enforced:
    - seq is unique and strictly increasing in emission order
      (allocated by SequenceService).
    - A transfer writes exactly two TRANSFER rows sharing one tx_id: the
      FEE leg, then the NET leg.  Genesis writes one MINT row.
    - Rows are never updated or deleted.

Audit relevance:
    Ordering by seq reproduces the exact order events were emitted, which
    is the order external consumers must observe them in.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import Base, UTCDateTime, UUIDString
from ledger_kernel.db.types import Address, Sequence, TokenAmount
from ledger_kernel.domain.dtos import EventKind, LedgerEventRecord, TransferLegKind


class LedgerEvent(Base):
    """
    One observable event.

    For TRANSFER rows ``source``/``target`` are from/to; for APPROVAL rows
    they are owner/spender and ``amount`` is the resulting quota.
    """

    __tablename__ = "ledger_events"

    __table_args__ = (
        Index("idx_ledger_event_tx", "tx_id"),
        Index("idx_ledger_event_source", "source"),
        Index("idx_ledger_event_target", "target"),
    )

    seq: Mapped[Sequence] = mapped_column(unique=True)

    # Groups the events of one request
    tx_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)

    kind: Mapped[EventKind] = mapped_column(String(20), nullable=False)

    leg: Mapped[TransferLegKind | None] = mapped_column(String(10), nullable=True)

    source: Mapped[Address]

    target: Mapped[Address]

    amount: Mapped[TokenAmount]

    occurred_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
    )

    def to_record(self) -> LedgerEventRecord:
        return LedgerEventRecord(
            seq=self.seq,
            tx_id=self.tx_id,
            kind=EventKind(self.kind),
            leg=TransferLegKind(self.leg) if self.leg is not None else None,
            source=self.source,
            target=self.target,
            amount=self.amount,
            occurred_at=self.occurred_at,
        )

    def __repr__(self) -> str:
        return f"<LedgerEvent #{self.seq} {self.kind} {self.source}->{self.target}: {self.amount}>"
