"""
Module: ledger_kernel.models.allowance
Responsibility: ORM persistence for spending quotas granted by an owner to a
    spender.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    NON_NEGATIVE_ALLOWANCE -- amount >= 0 (ck_allowance_non_negative).
    One row per (owner, spender) pair (uq_allowance_owner_spender).
"""

from sqlalchemy import CheckConstraint, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase
from ledger_kernel.db.types import Address, TokenAmount


class Allowance(TrackedBase):
    """Amount ``spender`` may still move out of ``owner``'s balance."""

    __tablename__ = "allowances"

    __table_args__ = (
        UniqueConstraint("owner", "spender", name="uq_allowance_owner_spender"),
        CheckConstraint("amount >= 0", name="ck_allowance_non_negative"),
        Index("idx_allowance_spender", "spender"),
    )

    owner: Mapped[Address]

    spender: Mapped[Address]

    amount: Mapped[TokenAmount] = mapped_column(default=0)

    def __repr__(self) -> str:
        return f"<Allowance {self.owner}->{self.spender}: {self.amount}>"
