"""
Module: ledger_kernel.models.referral
Responsibility: ORM persistence for referral assignments (who introduced whom).
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    REFERRAL_WRITE_ONCE -- one row per account (uq_referral_account), never
        updated or deleted; account != referrer (ck_referral_not_self).

Audit relevance:
    The referrer recorded here receives the fee leg of every transfer the
    account sends, at the referral rate.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import Base, UTCDateTime
from ledger_kernel.db.types import Address


class ReferralAssignment(Base):
    """Permanent link from an account to the account that referred it."""

    __tablename__ = "referral_assignments"

    __table_args__ = (
        UniqueConstraint("account", name="uq_referral_account"),
        CheckConstraint("account <> referrer", name="ck_referral_not_self"),
        Index("idx_referral_referrer", "referrer"),
    )

    account: Mapped[Address]

    referrer: Mapped[Address]

    assigned_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ReferralAssignment {self.account} <- {self.referrer}>"
