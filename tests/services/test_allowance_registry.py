"""Tests for AllowanceRegistry: approve, consume, increase, decrease."""

import pytest

from ledger_kernel.domain.dtos import EventKind
from ledger_kernel.domain.values import MAX_SUPPLY, ZERO_ADDRESS
from ledger_kernel.exceptions import (
    AllowanceExceededError,
    InvalidAmountError,
    ZeroAddressError,
)
from ledger_kernel.selectors.ledger_selector import LedgerSelector
from ledger_kernel.services.allowance_registry import AllowanceRegistry
from tests.conftest import ALICE, BOB, CAROL


@pytest.fixture
def registry(session, deterministic_clock):
    return AllowanceRegistry(session, deterministic_clock)


class TestApprove:

    def test_never_approved_is_zero(self, registry):
        assert registry.allowance_of(ALICE, BOB) == 0

    def test_approve_sets_quota(self, registry):
        receipt = registry.approve(ALICE, BOB, 500)
        assert receipt.allowance == 500
        assert registry.allowance_of(ALICE, BOB) == 500

    def test_approve_overwrites(self, registry):
        registry.approve(ALICE, BOB, 500)
        registry.approve(ALICE, BOB, 20)
        assert registry.allowance_of(ALICE, BOB) == 20

    def test_approve_zero_is_allowed(self, registry):
        registry.approve(ALICE, BOB, 500)
        registry.approve(ALICE, BOB, 0)
        assert registry.allowance_of(ALICE, BOB) == 0

    def test_quota_is_per_pair(self, registry):
        registry.approve(ALICE, BOB, 500)
        assert registry.allowance_of(BOB, ALICE) == 0
        assert registry.allowance_of(ALICE, CAROL) == 0

    def test_approve_emits_approval_event(self, registry, session):
        receipt = registry.approve(ALICE, BOB, 500)
        events = LedgerSelector(session).events(kind=EventKind.APPROVAL)
        assert len(events) == 1
        assert events[0] == receipt.event
        assert events[0].source == ALICE
        assert events[0].target == BOB
        assert events[0].amount == 500
        assert events[0].leg is None

    def test_null_spender_rejected(self, registry):
        with pytest.raises(ZeroAddressError) as exc_info:
            registry.approve(ALICE, ZERO_ADDRESS, 10)
        assert exc_info.value.role == "spender"

    def test_null_owner_rejected(self, registry):
        with pytest.raises(ZeroAddressError) as exc_info:
            registry.approve(None, BOB, 10)
        assert exc_info.value.role == "owner"

    def test_negative_amount_rejected(self, registry):
        with pytest.raises(InvalidAmountError):
            registry.approve(ALICE, BOB, -1)


class TestConsume:

    def test_consume_reduces_quota(self, registry):
        registry.approve(ALICE, BOB, 500)
        assert registry.consume(ALICE, BOB, 200) == 300
        assert registry.allowance_of(ALICE, BOB) == 300

    def test_consume_full_quota(self, registry):
        registry.approve(ALICE, BOB, 500)
        assert registry.consume(ALICE, BOB, 500) == 0

    def test_consume_above_quota_rejected(self, registry):
        registry.approve(ALICE, BOB, 500)
        with pytest.raises(AllowanceExceededError) as exc_info:
            registry.consume(ALICE, BOB, 501)
        assert exc_info.value.allowance == 500
        assert exc_info.value.requested == 501
        assert registry.allowance_of(ALICE, BOB) == 500

    def test_consume_without_approval_rejected(self, registry):
        with pytest.raises(AllowanceExceededError):
            registry.consume(ALICE, BOB, 1)

    def test_consume_emits_no_event(self, registry, session):
        registry.approve(ALICE, BOB, 500)
        registry.consume(ALICE, BOB, 100)
        assert len(LedgerSelector(session).events()) == 1


class TestIncreaseDecrease:

    def test_increase_from_zero(self, registry):
        receipt = registry.increase(ALICE, BOB, 50)
        assert receipt.allowance == 50

    def test_increase_adds(self, registry):
        registry.approve(ALICE, BOB, 100)
        registry.increase(ALICE, BOB, 50)
        assert registry.allowance_of(ALICE, BOB) == 150

    def test_increase_past_max_rejected(self, registry):
        registry.approve(ALICE, BOB, MAX_SUPPLY)
        with pytest.raises(InvalidAmountError):
            registry.increase(ALICE, BOB, 1)
        assert registry.allowance_of(ALICE, BOB) == MAX_SUPPLY

    def test_decrease_subtracts(self, registry):
        registry.approve(ALICE, BOB, 100)
        receipt = registry.decrease(ALICE, BOB, 30)
        assert receipt.allowance == 70
        assert registry.allowance_of(ALICE, BOB) == 70

    def test_decrease_below_zero_rejected(self, registry, session):
        registry.approve(ALICE, BOB, 100)
        with pytest.raises(AllowanceExceededError):
            registry.decrease(ALICE, BOB, 101)
        assert registry.allowance_of(ALICE, BOB) == 100
        assert len(LedgerSelector(session).events(kind=EventKind.APPROVAL)) == 1

    def test_each_adjustment_emits_event_with_resulting_quota(self, registry, session):
        registry.approve(ALICE, BOB, 100)
        registry.increase(ALICE, BOB, 50)
        registry.decrease(ALICE, BOB, 20)
        amounts = [e.amount for e in LedgerSelector(session).events(kind=EventKind.APPROVAL)]
        assert amounts == [100, 150, 130]
