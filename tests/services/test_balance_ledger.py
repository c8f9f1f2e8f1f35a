"""Tests for BalanceLedger checked debit/credit."""

import pytest

from ledger_kernel.exceptions import InsufficientBalanceError, InvalidAmountError
from ledger_kernel.services.balance_ledger import BalanceLedger
from tests.conftest import ALICE, BOB


class TestBalanceLedger:

    def test_unknown_account_has_zero_balance(self, session):
        assert BalanceLedger(session).balance_of("nobody") == 0

    def test_credit_creates_row(self, session):
        balances = BalanceLedger(session)
        assert balances.credit(ALICE, 100) == 100
        assert balances.balance_of(ALICE) == 100

    def test_credits_accumulate(self, session):
        balances = BalanceLedger(session)
        balances.credit(ALICE, 100)
        balances.credit(ALICE, 0)
        balances.credit(ALICE, 25)
        assert balances.balance_of(ALICE) == 125

    def test_debit_reduces_balance(self, session):
        balances = BalanceLedger(session)
        balances.credit(ALICE, 100)
        assert balances.debit(ALICE, 40) == 60
        assert balances.balance_of(ALICE) == 60

    def test_debit_to_exactly_zero(self, session):
        balances = BalanceLedger(session)
        balances.credit(ALICE, 100)
        assert balances.debit(ALICE, 100) == 0

    def test_overdraw_rejected_without_change(self, session):
        balances = BalanceLedger(session)
        balances.credit(ALICE, 100)
        with pytest.raises(InsufficientBalanceError) as exc_info:
            balances.debit(ALICE, 101)
        assert exc_info.value.balance == 100
        assert exc_info.value.requested == 101
        assert balances.balance_of(ALICE) == 100

    def test_debit_of_unknown_account_rejected(self, session):
        with pytest.raises(InsufficientBalanceError):
            BalanceLedger(session).debit(BOB, 1)

    def test_negative_credit_rejected(self, session):
        with pytest.raises(InvalidAmountError):
            BalanceLedger(session).credit(ALICE, -1)

    def test_balance_change_logged(self, session, captured_logs):
        balances = BalanceLedger(session)
        balances.credit(ALICE, 10)
        balances.debit(ALICE, 3)

        messages = [r["message"] for r in captured_logs()]
        assert "balance_credited" in messages
        assert "balance_debited" in messages
