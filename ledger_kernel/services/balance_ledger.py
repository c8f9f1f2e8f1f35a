"""
BalanceLedger -- checked debit/credit of account balances.

Responsibility:
    The only writer of ``account_balances``.  Debits fail when the account
    holds less than requested; credits always succeed.

Architecture position:
    Kernel > Services.  Called by TransferOrchestrator (and once by
    GenesisService for the initial mint).  Never exposed at the boundary;
    outer layers read balances through LedgerSelector.

Invariants enforced:
    NON_NEGATIVE_BALANCE -- debit() checks before writing.
    CONSERVATION -- the ledger itself neither creates nor destroys value;
        callers pair every debit with credits of the same total.

Failure modes:
    - InsufficientBalanceError when balance < amount.
    - InvalidAmountError for negative or non-integer amounts.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.values import require_amount
from ledger_kernel.exceptions import InsufficientBalanceError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.balance import AccountBalance
from ledger_kernel.services.base import BaseService

logger = get_logger("services.balance_ledger")


class BalanceLedger(BaseService):
    """Checked mutations of per-account balances."""

    def __init__(self, session: Session):
        super().__init__(session)

    def balance_of(self, account: str) -> int:
        """Balance of ``account``; 0 for an account never credited."""
        row = self._get(account)
        return row.amount if row is not None else 0

    def debit(self, account: str, amount: int) -> int:
        """
        Decrease ``account`` by ``amount``.

        Postconditions: returns the new balance, which is >= 0.

        Raises:
            InsufficientBalanceError: If the balance is below ``amount``.
        """
        amount = require_amount(amount)
        row = self._get(account, for_update=True)
        balance = row.amount if row is not None else 0
        if balance < amount:
            raise InsufficientBalanceError(account, balance, amount)

        if row is not None:
            row.amount = balance - amount
        self.session.flush()

        logger.debug(
            "balance_debited",
            extra={"account": account, "amount": amount, "balance": balance - amount},
        )
        return balance - amount

    def credit(self, account: str, amount: int) -> int:
        """
        Increase ``account`` by ``amount``, creating its row on first credit.

        Postconditions: returns the new balance.
        """
        amount = require_amount(amount)
        row = self._get(account, for_update=True)
        if row is None:
            row = AccountBalance(address=account, amount=0)
            self.session.add(row)
        row.amount += amount
        self.session.flush()

        logger.debug(
            "balance_credited",
            extra={"account": account, "amount": amount, "balance": row.amount},
        )
        return row.amount

    def _get(self, account: str, for_update: bool = False) -> AccountBalance | None:
        stmt = select(AccountBalance).where(AccountBalance.address == account)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()
