"""
Module: ledger_kernel.selectors.ledger_selector
Responsibility: Read-side queries over balances, allowances, referrals, fee
    settings, metadata, and the event log.  Every read here is side-effect
    free and never fails for an unknown account.
Architecture position: Kernel > Selectors.

Invariants enforced:
    CONSERVATION -- verify_conservation() compares sum(balances) against
        total_supply and raises on any difference.
"""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, or_, select

from ledger_kernel.domain.dtos import EventKind, LedgerEventRecord, LedgerMetadata
from ledger_kernel.domain.fees import FeeRates
from ledger_kernel.exceptions import ConservationViolationError, LedgerNotInitializedError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.allowance import Allowance
from ledger_kernel.models.balance import AccountBalance
from ledger_kernel.models.ledger_event import LedgerEvent
from ledger_kernel.models.ledger_settings import SINGLETON_KEY, LedgerSettings
from ledger_kernel.models.referral import ReferralAssignment
from ledger_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.ledger")


@dataclass(frozen=True)
class HolderBalance:
    """An account with a non-zero balance."""

    address: str
    balance: int


class LedgerSelector(BaseSelector):
    """Read-only view of ledger state."""

    def balance_of(self, account: str) -> int:
        amount = self.session.execute(
            select(AccountBalance.amount).where(AccountBalance.address == account)
        ).scalar_one_or_none()
        return amount or 0

    def allowance_of(self, owner: str, spender: str) -> int:
        amount = self.session.execute(
            select(Allowance.amount).where(
                Allowance.owner == owner,
                Allowance.spender == spender,
            )
        ).scalar_one_or_none()
        return amount or 0

    def referrer_of(self, account: str) -> str | None:
        return self.session.execute(
            select(ReferralAssignment.referrer).where(
                ReferralAssignment.account == account
            )
        ).scalar_one_or_none()

    def metadata(self) -> LedgerMetadata:
        settings = self._settings()
        return LedgerMetadata(
            name=settings.name,
            symbol=settings.symbol,
            decimals=settings.decimals,
            total_supply=settings.total_supply,
            owner=settings.owner,
            profile_id=settings.profile_id,
            info_url=settings.info_url,
        )

    def total_supply(self) -> int:
        return self._settings().total_supply

    def fee_rates(self) -> FeeRates:
        settings = self._settings()
        return FeeRates(settings.referral_rate_bp, settings.beneficiary_rate_bp)

    def is_initialized(self) -> bool:
        return self._settings_or_none() is not None

    def holders(self) -> list[HolderBalance]:
        """Accounts with a positive balance, largest first."""
        rows = self.session.execute(
            select(AccountBalance.address, AccountBalance.amount)
            .where(AccountBalance.amount > 0)
            .order_by(AccountBalance.amount.desc(), AccountBalance.address)
        ).all()
        return [HolderBalance(address=a, balance=b) for a, b in rows]

    def sum_of_balances(self) -> int:
        return self.session.execute(
            select(func.coalesce(func.sum(AccountBalance.amount), 0))
        ).scalar_one()

    def events(
        self,
        tx_id: UUID | None = None,
        account: str | None = None,
        kind: EventKind | None = None,
    ) -> list[LedgerEventRecord]:
        """Event log in emission (seq) order, optionally filtered."""
        stmt = select(LedgerEvent).order_by(LedgerEvent.seq)
        if tx_id is not None:
            stmt = stmt.where(LedgerEvent.tx_id == tx_id)
        if account is not None:
            stmt = stmt.where(
                or_(LedgerEvent.source == account, LedgerEvent.target == account)
            )
        if kind is not None:
            stmt = stmt.where(LedgerEvent.kind == kind.value)
        return [e.to_record() for e in self.session.execute(stmt).scalars()]

    def verify_conservation(self) -> int:
        """
        Check that balances sum to total supply.

        Returns:
            The total supply.

        Raises:
            ConservationViolationError: On any difference.
        """
        expected = self.total_supply()
        actual = int(self.sum_of_balances())
        if actual != expected:
            logger.error(
                "conservation_violated",
                extra={"expected": expected, "actual": actual},
            )
            raise ConservationViolationError(expected, actual)
        return expected

    def _settings_or_none(self) -> LedgerSettings | None:
        return self.session.execute(
            select(LedgerSettings).where(LedgerSettings.singleton_key == SINGLETON_KEY)
        ).scalar_one_or_none()

    def _settings(self) -> LedgerSettings:
        settings = self._settings_or_none()
        if settings is None:
            raise LedgerNotInitializedError()
        return settings
