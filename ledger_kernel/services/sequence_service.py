"""
SequenceService -- gap-free event numbering.

Each named sequence is a single counter row.  Allocation locks that row
(``FOR UPDATE`` on PostgreSQL; SQLite serialises writers itself), bumps
it, and flushes inside the caller's transaction.  A rejected transfer
rolls its savepoint back and the number goes back with it, so ledger
events are numbered 1, 2, 3, ... with no holes.

Called by EventRecorder only.  Never computes ``max(seq) + 1`` over the
event table.
"""

from sqlalchemy import select
from sqlalchemy.orm import Mapped, Session, mapped_column

from ledger_kernel.db.base import Base
from ledger_kernel.db.types import ShortCode
from ledger_kernel.logging_config import get_logger

logger = get_logger("services.sequence")


class SequenceCounter(Base):
    """Last value handed out for one named sequence."""

    __tablename__ = "sequence_counters"

    name: Mapped[ShortCode] = mapped_column(unique=True)
    current_value: Mapped[int] = mapped_column(default=0)


class SequenceService:

    LEDGER_EVENT = "ledger_event"

    def __init__(self, session: Session):
        self._session = session

    def _counter(self, name: str, *, lock: bool) -> SequenceCounter | None:
        stmt = select(SequenceCounter).where(SequenceCounter.name == name)
        if lock:
            # Re-read under the lock; a cached instance may be stale.
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self._session.scalars(stmt).one_or_none()

    def next_value(self, sequence_name: str) -> int:
        """Allocate and return the next number (the first is 1)."""
        counter = self._counter(sequence_name, lock=True)
        if counter is None:
            counter = SequenceCounter(name=sequence_name, current_value=0)
            self._session.add(counter)

        counter.current_value += 1
        self._session.flush()

        value = counter.current_value
        logger.debug("sequence_allocated", extra={"sequence_name": sequence_name, "value": value})
        return value

    def current_value(self, sequence_name: str) -> int | None:
        """Last allocated number, or None if the sequence was never used."""
        counter = self._counter(sequence_name, lock=False)
        return None if counter is None else counter.current_value
