"""
Module: ledger_kernel.models.ledger_settings
Responsibility: ORM persistence for the singleton row holding token metadata,
    total supply, the owner (who is also the fee beneficiary), and the two
    fee-rate scalars.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    FEE_RATE_ORDERING -- 0 <= referral_rate_bp <= beneficiary_rate_bp <= 500
        (ck_ledger_settings_rate_bounds, ck_ledger_settings_rate_order).
    Singleton -- singleton_key is fixed and unique, so a second genesis row
        cannot be inserted.
    name, symbol, decimals, total_supply are written once at genesis.
"""

from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase
from ledger_kernel.db.types import Address, RateBp, TokenAmount

SINGLETON_KEY = "ledger"


class LedgerSettings(TrackedBase):
    """The ledger's configuration and governance state."""

    __tablename__ = "ledger_settings"

    __table_args__ = (
        UniqueConstraint("singleton_key", name="uq_ledger_settings_singleton"),
        CheckConstraint(
            "referral_rate_bp >= 0 AND beneficiary_rate_bp <= 500",
            name="ck_ledger_settings_rate_bounds",
        ),
        CheckConstraint(
            "referral_rate_bp <= beneficiary_rate_bp",
            name="ck_ledger_settings_rate_order",
        ),
        CheckConstraint("total_supply >= 0", name="ck_ledger_settings_supply"),
    )

    singleton_key: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SINGLETON_KEY,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    symbol: Mapped[str] = mapped_column(String(32), nullable=False)

    decimals: Mapped[int] = mapped_column(Integer, nullable=False)

    total_supply: Mapped[TokenAmount]

    # Governance actor; also the fee beneficiary
    owner: Mapped[Address]

    referral_rate_bp: Mapped[RateBp]

    beneficiary_rate_bp: Mapped[RateBp]

    # Configuration profile the ledger was deployed from, if any
    profile_id: Mapped[str | None] = mapped_column(String(50), nullable=True)

    info_url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<LedgerSettings {self.symbol} owner={self.owner}>"
