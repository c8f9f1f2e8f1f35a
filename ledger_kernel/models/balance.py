"""
Module: ledger_kernel.models.balance
Responsibility: ORM persistence for per-account token balances.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    NON_NEGATIVE_BALANCE -- amount >= 0 (ck_account_balance_non_negative).
    One row per address (uq_account_balance_address).

Failure modes:
    - IntegrityError if a write would store a negative amount.  Services
      raise InsufficientBalanceError before that can happen.

Audit relevance:
    Rows are created lazily on first credit.  An address without a row has
    balance 0.  Only BalanceLedger writes to this table.
"""

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase
from ledger_kernel.db.types import Address, TokenAmount


class AccountBalance(TrackedBase):
    """Current balance of one account in smallest token units."""

    __tablename__ = "account_balances"

    __table_args__ = (
        UniqueConstraint("address", name="uq_account_balance_address"),
        CheckConstraint("amount >= 0", name="ck_account_balance_non_negative"),
    )

    address: Mapped[Address]

    amount: Mapped[TokenAmount] = mapped_column(default=0)

    def __repr__(self) -> str:
        return f"<AccountBalance {self.address}: {self.amount}>"
