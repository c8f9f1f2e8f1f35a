"""
Module: ledger_kernel.db.base
Responsibility: ORM roots shared by every ledger table.  Fixes how
    identifiers, timestamps, and token amounts are stored so individual
    models never choose column types themselves.
Architecture position: Kernel > DB.  Imported by models/ and by the
    sequence counter; imports nothing else from the kernel.

Invariants enforced:
    - Every row is keyed by a random UUID, stored as 36-character text so
      SQLite and PostgreSQL share one schema.
    - ``int`` annotations become BigInteger, wide enough for MAX_SUPPLY
      (see domain/values.py).
    - ``datetime`` columns round-trip as aware UTC on every backend.
"""

from datetime import UTC, datetime
from typing import ClassVar
from uuid import UUID, uuid4

from sqlalchemy import BigInteger, DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """
    Aware UTC datetimes in and out, whatever the backend.

    SQLite keeps no offset and hands back naive values; those are read as
    UTC.  Aware values are converted to UTC before they are written.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None or value.tzinfo is None:
            return value
        return value.astimezone(UTC)

    def process_result_value(self, value, dialect):
        if value is None or value.tzinfo is not None:
            return value
        return value.replace(tzinfo=UTC)


class UUIDString(TypeDecorator):
    """UUID in Python, canonical hyphenated text in the database."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else UUID(value)


class Base(DeclarativeBase):
    """Root of all ledger tables; supplies the ``id`` primary key."""

    type_annotation_map: ClassVar[dict] = {
        UUID: UUIDString(),
        datetime: UTCDateTime(),
        int: BigInteger,
    }

    id: Mapped[UUID] = mapped_column(UUIDString(), primary_key=True, default=uuid4)


class TrackedBase(Base):
    """
    Tables whose rows are mutated in place (balances, allowances, settings).

    ``created_at``/``updated_at`` are maintained by the database and carry
    no ledger meaning; the event log is the history.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), onupdate=func.now(), nullable=False
    )
